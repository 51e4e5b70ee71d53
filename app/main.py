import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.repos.posts_repo import FilesystemPostsRepo
from app.routers import posts
from app.services.post_index import clear_index, rebuild_index
from app.services.posts_service import PostsService
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Blog API", description="Markdown posts for the portfolio site")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CACHE_POSTS:
        service = PostsService(
            repo=FilesystemPostsRepo(settings.posts_path),
            words_per_minute=settings.READING_WPM,
            toc_levels=settings.toc_levels,
        )
        rebuild_index(service)
        logger.info(f"Post index warmed from {settings.posts_path}")

    try:
        yield
    finally:
        clear_index()


app.router.lifespan_context = lifespan

app.include_router(posts.router)


@app.get("/")
async def root():
    return {"message": "Blog API is running"}
