from fastapi import Depends

from postmatter.repos.posts_repo import FilePostsRepo
from postmatter.security import get_settings
from postmatter.services.posts_service import PostsService
from postmatter.settings import Settings


def get_posts_repo(current_settings: Settings = Depends(get_settings)):
    return FilePostsRepo(
        current_settings.CONTENT_DIR, encoding=current_settings.CONTENT_ENCODING
    )


def get_posts_service(
    repo=Depends(get_posts_repo),
    current_settings: Settings = Depends(get_settings),
):
    return PostsService(
        repo=repo,
        include_drafts=current_settings.INCLUDE_DRAFTS,
        workers=current_settings.LOAD_WORKERS,
    )
