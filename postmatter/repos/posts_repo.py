import datetime
import logging
from pathlib import Path
from typing import List, Optional, Union

from postmatter.exceptions import PostReadError
from postmatter.settings import settings

logger = logging.getLogger(__name__)

POST_SUFFIX = ".md"


class FilePostsRepo:
    def __init__(
        self,
        content_dir: Optional[Union[Path, str]] = None,
        encoding: Optional[str] = None,
    ):
        self.content_dir = Path(content_dir or settings.CONTENT_DIR)
        self.encoding = encoding or settings.CONTENT_ENCODING

    def list_post_paths(self) -> List[Path]:
        if not self.content_dir.is_dir():
            logger.warning(f"Content directory not found: {self.content_dir}")
            return []
        return sorted(
            path
            for path in self.content_dir.rglob(f"*{POST_SUFFIX}")
            if path.is_file() and not self._is_hidden(path)
        )

    def slug_for(self, path: Path) -> str:
        """Slug is the path under the content dir without its extension."""
        relative = path.relative_to(self.content_dir)
        return relative.with_suffix("").as_posix()

    def get_post_path(self, slug: str) -> Optional[Path]:
        if not slug or slug.startswith("/"):
            return None
        path = self.content_dir / f"{slug}{POST_SUFFIX}"
        try:
            path.resolve().relative_to(self.content_dir.resolve())
        except ValueError:
            logger.warning(f"Rejected slug outside content dir: {slug}")
            return None
        if not path.is_file() or self._is_hidden(path):
            return None
        return path

    def read(self, path: Path) -> str:
        try:
            return path.read_bytes().decode(self.encoding)
        except UnicodeDecodeError as e:
            raise PostReadError(path, f"cannot decode as {self.encoding}: {e}") from e
        except OSError as e:
            raise PostReadError(path, f"cannot read file: {e}") from e

    def modified_at(self, path: Path) -> Optional[datetime.datetime]:
        try:
            mtime = path.stat().st_mtime
        except OSError:
            return None
        return datetime.datetime.fromtimestamp(mtime, tz=datetime.timezone.utc)

    def _is_hidden(self, path: Path) -> bool:
        relative = path.relative_to(self.content_dir)
        return any(part.startswith(".") for part in relative.parts)
