from typing import Any, Dict

from frontmatter.default_handlers import YAMLHandler

from postmatter.schemas.post import Post
from postmatter.services.front_matter import DELIMITER

_yaml = YAMLHandler()


def front_matter_dict(post: Post) -> Dict[str, Any]:
    metadata: Dict[str, Any] = {"title": post.title}
    if post.date is not None:
        metadata["date"] = post.date
    metadata["draft"] = post.draft
    metadata["tags"] = list(post.tags)
    return metadata


def render_front_matter(post: Post) -> str:
    """Serialize a post's fields as a ``---`` delimited YAML block."""
    # wide lines keep long titles on one line
    metadata = _yaml.export(front_matter_dict(post), sort_keys=False, width=4096)
    return f"{DELIMITER}\n{metadata}\n{DELIMITER}\n"


def dumps_post(post: Post) -> str:
    """Front matter followed by the body, unchanged."""
    return render_front_matter(post) + post.body
