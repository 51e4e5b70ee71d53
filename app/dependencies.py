from fastapi import Depends

from app.repos.posts_repo import FilesystemPostsRepo
from app.services.post_index import get_index
from app.services.posts_service import PostsService
from app.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_posts_repo(current_settings: Settings = Depends(get_settings)):
    return FilesystemPostsRepo(current_settings.posts_path)


def get_posts_service(
    repo=Depends(get_posts_repo),
    current_settings: Settings = Depends(get_settings),
):
    service = PostsService(
        repo=repo,
        words_per_minute=current_settings.READING_WPM,
        toc_levels=current_settings.toc_levels,
    )
    if current_settings.CACHE_POSTS:
        return get_index(service)
    return service
