from postmatter.dependencies import get_posts_repo, get_posts_service
from postmatter.repos.posts_repo import FilePostsRepo
from postmatter.services.posts_service import PostsService
from postmatter.settings import Settings


def test_get_posts_repo_uses_content_settings(tmp_path):
    settings = Settings(CONTENT_DIR=tmp_path, CONTENT_ENCODING="latin-1")

    repo = get_posts_repo(current_settings=settings)

    assert isinstance(repo, FilePostsRepo)
    assert repo.content_dir == tmp_path
    assert repo.encoding == "latin-1"


def test_get_posts_service_constructs_service():
    class FakeRepo:
        pass

    repo = FakeRepo()
    settings = Settings(INCLUDE_DRAFTS=True, LOAD_WORKERS=2)

    svc = get_posts_service(repo=repo, current_settings=settings)

    assert isinstance(svc, PostsService)
    assert svc.repo is repo
    assert svc.include_drafts is True
    assert svc.workers == 2
