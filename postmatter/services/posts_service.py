import datetime
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from postmatter.exceptions import PostReadError
from postmatter.schemas.blog import (
    DiagnosticsReport,
    LoadFailureOut,
    PostDetail,
    PostDiagnostics,
    PostSummary,
)
from postmatter.schemas.post import ParsedPost
from postmatter.services.dates import resolve_date
from postmatter.services.front_matter import parse_post
from postmatter.settings import settings

logger = logging.getLogger(__name__)

_EPOCH = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


@dataclass
class LoadedPost:
    slug: str
    path: Path
    parsed: ParsedPost
    modified: Optional[datetime.datetime] = None


@dataclass
class LoadFailure:
    path: Path
    error: str


@dataclass
class BatchResult:
    posts: List[LoadedPost] = field(default_factory=list)
    failures: List[LoadFailure] = field(default_factory=list)


def load_post(repo, path: Path) -> LoadedPost:
    """Read and parse one post. Raises PostReadError if the file is unreadable."""
    text = repo.read(path)
    slug = repo.slug_for(path)
    parsed = parse_post(text)
    for diagnostic in parsed.diagnostics:
        where = f"{diagnostic.field}: " if diagnostic.field else ""
        logger.warning(f"{slug}: {where}{diagnostic.message}")
    return LoadedPost(
        slug=slug, path=path, parsed=parsed, modified=repo.modified_at(path)
    )


def _load_one(repo, path: Path) -> Union[LoadedPost, LoadFailure]:
    try:
        return load_post(repo, path)
    except PostReadError as e:
        logger.error(f"Skipping unreadable post {path}: {e.message}")
        return LoadFailure(path=path, error=e.message)


def load_all(repo, workers: int = 1) -> BatchResult:
    """
    Load every post under the repo's content dir.

    Files are independent, so they are parsed sequentially or on a thread pool;
    either way results come back in path order. Unreadable files are reported
    as failures without stopping the rest.
    """
    paths = repo.list_post_paths()
    if workers <= 1 or len(paths) <= 1:
        outcomes = [_load_one(repo, path) for path in paths]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(lambda path: _load_one(repo, path), paths))

    result = BatchResult()
    for outcome in outcomes:
        if isinstance(outcome, LoadFailure):
            result.failures.append(outcome)
        else:
            result.posts.append(outcome)
    logger.info(f"Loaded {len(result.posts)} posts ({len(result.failures)} failed)")
    return result


class PostsService:
    def __init__(
        self,
        repo,
        include_drafts: Optional[bool] = None,
        workers: Optional[int] = None,
    ):
        self.repo = repo
        self.include_drafts = (
            settings.INCLUDE_DRAFTS if include_drafts is None else include_drafts
        )
        self.workers = settings.LOAD_WORKERS if workers is None else workers

    def load(self) -> BatchResult:
        return load_all(self.repo, workers=self.workers)

    def list_posts(self) -> List[PostSummary]:
        posts = [p for p in self.load().posts if self._is_visible(p)]
        posts.sort(key=sort_key, reverse=True)
        return [to_summary(p) for p in posts]

    def get_post(self, slug: str) -> Optional[PostDetail]:
        path = self.repo.get_post_path(slug)
        if not path:
            return None
        try:
            loaded = load_post(self.repo, path)
        except PostReadError as e:
            logger.error(f"Failed to read post {slug}: {e.message}")
            return None
        if not self._is_visible(loaded):
            return None
        return to_detail(loaded)

    def diagnostics(self) -> DiagnosticsReport:
        result = self.load()
        return DiagnosticsReport(
            posts=[
                PostDiagnostics(
                    slug=p.slug,
                    mode=p.parsed.mode,
                    diagnostics=p.parsed.diagnostics,
                )
                for p in result.posts
            ],
            failures=[
                LoadFailureOut(path=str(f.path), error=f.error) for f in result.failures
            ],
        )

    def _is_visible(self, loaded: LoadedPost) -> bool:
        return self.include_drafts or not loaded.parsed.post.draft


def sort_key(loaded: LoadedPost) -> datetime.datetime:
    """Front-matter date when it parses, else the file's modification time."""
    return resolve_date(loaded.parsed.post.date) or loaded.modified or _EPOCH


def to_summary(loaded: LoadedPost) -> PostSummary:
    post = loaded.parsed.post
    return PostSummary(
        slug=loaded.slug,
        title=post.title,
        date=post.date,
        tags=post.tags,
        readingTime=calculate_reading_time(post.body),
        draft=post.draft,
    )


def to_detail(loaded: LoadedPost) -> PostDetail:
    summary = to_summary(loaded)
    return PostDetail(**summary.model_dump(), content=loaded.parsed.post.body)


def calculate_reading_time(text: str) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / 200) or 1
    return f"{minutes} min"
