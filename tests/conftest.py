import datetime
import textwrap
from pathlib import Path
from typing import Optional

from postmatter.exceptions import PostReadError


class FakeRepo:
    """
    In-memory stand-in for FilePostsRepo.
    Values are raw markdown (dedented like the other fixtures) or an exception
    to raise from read().
    """

    def __init__(self, files: dict, modified: Optional[dict] = None):
        self.files = files
        self.modified = modified or {}
        self.content_dir = Path("content/posts")
        self.reads = []

    def list_post_paths(self):
        return sorted(Path(f"{slug}.md") for slug in self.files)

    def slug_for(self, path: Path) -> str:
        return Path(path).with_suffix("").as_posix()

    def get_post_path(self, slug: str):
        return Path(f"{slug}.md") if slug in self.files else None

    def read(self, path: Path) -> str:
        slug = self.slug_for(path)
        self.reads.append(slug)
        raw = self.files[slug]
        if isinstance(raw, Exception):
            raise raw
        return textwrap.dedent(raw).lstrip()

    def modified_at(self, path: Path):
        return self.modified.get(self.slug_for(path))


def unreadable(slug: str) -> PostReadError:
    return PostReadError(Path(f"{slug}.md"), "cannot decode as utf-8")


def utc(*args) -> datetime.datetime:
    return datetime.datetime(*args, tzinfo=datetime.timezone.utc)


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self, list_posts_return=None, get_post_return=None, diagnostics_return=None
    ):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self._diagnostics_return = diagnostics_return or {"posts": [], "failures": []}
        self.requested_slugs = []

    def list_posts(self):
        return self._list_posts_return

    def get_post(self, slug: str):
        self.requested_slugs.append(slug)
        return self._get_post_return

    def diagnostics(self):
        return self._diagnostics_return
