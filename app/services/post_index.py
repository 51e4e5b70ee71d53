import logging
import threading
from typing import Dict, List, Optional

from app.errors import MalformedContentError
from app.schemas.blog import PostDetail, PostId, PostSummary

logger = logging.getLogger(__name__)


class PostIndex:
    """Immutable snapshot of every post, built in one pass.

    Exposes the same read operations as `PostsService` so callers can use
    either interchangeably.
    """

    def __init__(self, ids: List[PostId], summaries: List[PostSummary], details: Dict[str, PostDetail]):
        self._ids = tuple(ids)
        self._summaries = tuple(summaries)
        self._details = dict(details)

    @classmethod
    def build(cls, service) -> "PostIndex":
        ids = service.list_post_ids()
        summaries = service.list_posts()
        details = {}
        for post_id in ids:
            try:
                detail = service.get_post(post_id.id)
            except MalformedContentError as e:
                logger.warning(f"Leaving {post_id.id} out of the index: {e.reason}")
                continue
            if detail:
                details[post_id.id] = detail
        logger.info(f"Built post index with {len(details)} of {len(ids)} posts")
        return cls(ids, summaries, details)

    def list_post_ids(self) -> List[PostId]:
        return list(self._ids)

    def list_posts(self) -> List[PostSummary]:
        return list(self._summaries)

    def get_post(self, slug: str) -> Optional[PostDetail]:
        return self._details.get(slug)


_index: Optional[PostIndex] = None
_index_lock = threading.Lock()


def get_index(service) -> PostIndex:
    """Return the process-wide index, building it on first use."""
    global _index
    if _index is None:
        with _index_lock:
            if _index is None:
                _index = PostIndex.build(service)
    return _index


def rebuild_index(service) -> PostIndex:
    """Replace the process-wide index with a freshly built one."""
    global _index
    index = PostIndex.build(service)
    with _index_lock:
        _index = index
    return index


def clear_index() -> None:
    global _index
    with _index_lock:
        _index = None
