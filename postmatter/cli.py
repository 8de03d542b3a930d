"""Report front-matter problems across a content directory.

Usage: postmatter-check [CONTENT_DIR]

Diagnostics are warnings and never fail the check; the exit status is 1 only
when a post file could not be read.
"""

import argparse
import logging
import sys
from typing import List, Optional

from postmatter.repos.posts_repo import FilePostsRepo
from postmatter.services.posts_service import load_all
from postmatter.settings import settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="postmatter-check",
        description="Check the front matter of every markdown post.",
    )
    parser.add_argument(
        "content_dir",
        nargs="?",
        default=None,
        help=f"directory of posts (default: {settings.CONTENT_DIR})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=settings.LOAD_WORKERS,
        help="number of files parsed in parallel",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    repo = FilePostsRepo(args.content_dir)
    result = load_all(repo, workers=args.workers)

    flagged = sum(1 for p in result.posts if p.parsed.diagnostics)
    logger.info(
        f"Checked {len(result.posts) + len(result.failures)} posts in {repo.content_dir}: "
        f"{flagged} with warnings, {len(result.failures)} unreadable"
    )
    return 1 if result.failures else 0


if __name__ == "__main__":
    sys.exit(main())
