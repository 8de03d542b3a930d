import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from postmatter import dependencies as deps
from postmatter.schemas.blog import DiagnosticsReport, PostDetail, PostSummary
from postmatter.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[PostSummary])
def list_posts(service: PostsService = Depends(deps.get_posts_service)):
    """Get all posts metadata, newest first."""
    try:
        return service.list_posts()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug:path}", response_model=PostDetail)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by slug."""
    try:
        post = service.get_post(slug)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/diagnostics", response_model=DiagnosticsReport)
def get_diagnostics(service: PostsService = Depends(deps.get_posts_service)):
    """Front-matter problems and unreadable files across the content dir."""
    try:
        return service.diagnostics()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error collecting diagnostics: {e}")
        raise HTTPException(status_code=500, detail="Failed to collect diagnostics")
