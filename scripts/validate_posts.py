import logging
import sys

from app.errors import DuplicateSlugError, MalformedContentError
from app.repos.posts_repo import FilesystemPostsRepo
from app.services.posts_service import PostsService
from app.settings import settings

logger = logging.getLogger(__name__)


def validate_posts(service: PostsService) -> int:
    """Load every post strictly. Returns the number of failures."""
    try:
        ids = service.list_post_ids()
    except (OSError, DuplicateSlugError) as e:
        logger.error(f"Cannot enumerate posts: {e}")
        return 1

    failures = 0
    for post_id in ids:
        try:
            service.get_post(post_id.id)
        except MalformedContentError as e:
            logger.error(str(e))
            failures += 1

    logger.info(f"Checked {len(ids)} posts, {failures} failed")
    return failures


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    service = PostsService(
        repo=FilesystemPostsRepo(settings.posts_path),
        words_per_minute=settings.READING_WPM,
        toc_levels=settings.toc_levels,
    )
    return 1 if validate_posts(service) else 0


if __name__ == "__main__":
    sys.exit(main())
