import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app import dependencies as deps
from app.errors import MalformedContentError
from app.schemas.blog import PostDetail, PostId, PostSummary

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts/ids", response_model=List[PostId])
def list_post_ids(service=Depends(deps.get_posts_service)):
    """Get every post id, used to generate per-post routes."""
    try:
        return service.list_post_ids()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing post ids: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post ids")


@router.get("/posts", response_model=List[PostSummary])
def list_posts(
    include_micro: bool = Query(False, description="Include micro posts"),
    include_hidden: bool = Query(False, description="Include hidden posts"),
    service=Depends(deps.get_posts_service),
):
    """Get all posts metadata, newest first."""
    try:
        posts = service.list_posts()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")

    return [
        p
        for p in posts
        if (include_micro or not p.micro) and (include_hidden or not p.hidden)
    ]


@router.get("/posts/{post_id}", response_model=PostDetail)
def get_post(post_id: str, service=Depends(deps.get_posts_service)):
    """Get a single rendered post by id."""
    try:
        post = service.get_post(post_id)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except MalformedContentError as e:
        logger.warning(f"Malformed post {post_id}: {e.reason}")
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
