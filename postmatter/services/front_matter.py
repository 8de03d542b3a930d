"""Lenient front-matter parsing for markdown posts.

Posts are hand-edited, so the front matter is treated as best-effort: a missing
opening delimiter, a block that never closes, YAML broken by typographic quotes
or a second stacked block all degrade to partial metadata plus diagnostics.
Parsing never raises, and ``front_matter_text + post.body`` always equals the
input text.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple, Union

import yaml
from frontmatter.default_handlers import YAMLHandler

from postmatter.schemas.post import (
    Diagnostic,
    FieldResult,
    FieldStatus,
    FrontMatter,
    FrontMatterMode,
    ParsedPost,
    Post,
)
from postmatter.services.fields import (
    coerce_date,
    coerce_draft,
    coerce_tags,
    coerce_title,
)

logger = logging.getLogger(__name__)

RECOGNIZED_KEYS = ("title", "date", "draft", "tags")
DELIMITER = "---"
BOM = "\ufeff"

_KEY_LINE = re.compile(r"^([A-Za-z_][\w-]*)[ \t]*:(.*)$")
_SEQ_ITEM = re.compile(r"^\s*-\s+(.*)$")

# Resolvers that would turn scalars into bools, numbers or timestamps.
_TYPED_TAGS = {
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
}


class _TextScalarLoader(yaml.SafeLoader):
    """SafeLoader that reads every plain scalar except null as the text written.

    A repeated key keeps its first value, as the line scanner does.
    """

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
            seen = set()
            first = []
            for key_node, value_node in node.value:
                if isinstance(key_node, yaml.ScalarNode):
                    if key_node.value in seen:
                        continue
                    seen.add(key_node.value)
                first.append((key_node, value_node))
            node.value = first
        return super().construct_mapping(node, deep=deep)


_TextScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TYPED_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

_yaml = YAMLHandler()


def is_delimiter(line: str) -> bool:
    return line.rstrip() == DELIMITER


def _split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only, keeping line endings; form feeds and the like stay inline."""
    lines = [line + "\n" for line in text.split("\n")]
    lines[-1] = lines[-1][:-1]
    return lines if lines[-1] else lines[:-1]


def _line_text(line: str) -> str:
    return line.rstrip("\r\n")


def _scan_key_run(lines: List[str], start: int) -> Tuple[int, bool]:
    """
    Find the end of a run of ``key: value`` lines beginning at ``start``.

    The run stops at a blank line, a heading or any other line that is not
    key-shaped; indented lines and ``- item`` lines continue the previous key.
    A ``---`` line ends the run and is consumed. Returns the index just past
    the run and whether it was closed by a delimiter.
    """
    i = start
    while i < len(lines):
        text = _line_text(lines[i])
        if is_delimiter(text):
            if i > start:
                return i + 1, True
            break
        if not text.strip() or text.startswith("#"):
            break
        if _KEY_LINE.match(text):
            i += 1
            continue
        if i > start and (text[0].isspace() or _SEQ_ITEM.match(text)):
            i += 1
            continue
        break
    return i, False


def _has_recognized_key(lines: List[str]) -> bool:
    for line in lines:
        match = _KEY_LINE.match(_line_text(line))
        if match and match.group(1).lower() in RECOGNIZED_KEYS:
            return True
    return False


def split_front_matter(text: str) -> Tuple[str, str, str, FrontMatterMode]:
    """
    Split raw post text into (prefix, region, body, mode).

    ``prefix`` is the exact text removed from the front of the file (BOM and
    delimiter lines included), ``region`` the key/value text inside it.
    """
    lead = BOM if text.startswith(BOM) else ""
    lines = _split_lines(text[len(lead):])

    if lines and is_delimiter(lines[0]):
        for i in range(1, len(lines)):
            if is_delimiter(lines[i]):
                prefix = lead + "".join(lines[: i + 1])
                return prefix, "".join(lines[1:i]), text[len(prefix):], FrontMatterMode.DELIMITED

        end, _closed = _scan_key_run(lines, 1)
        if end > 1:
            prefix = lead + "".join(lines[:end])
            return prefix, "".join(lines[1:end]), text[len(prefix):], FrontMatterMode.UNTERMINATED
        return "", "", text, FrontMatterMode.NONE

    end, closed = _scan_key_run(lines, 0)
    region_lines = lines[: end - 1] if closed else lines[:end]
    if end and _has_recognized_key(region_lines):
        prefix = lead + "".join(lines[:end])
        return prefix, "".join(region_lines), text[len(prefix):], FrontMatterMode.BARE
    return "", "", text, FrontMatterMode.NONE


def scan_key_values(region: str) -> Dict[str, Any]:
    """
    Read ``key: value`` lines without a YAML parser.

    Values are the raw text after the colon. A key with an empty value followed
    by ``- item`` lines becomes a list. The first occurrence of a key wins.
    """
    values: Dict[str, Any] = {}
    pending: Optional[str] = None
    for line in map(_line_text, _split_lines(region)):
        item = _SEQ_ITEM.match(line)
        if item and pending is not None:
            values.setdefault(pending, [])
            values[pending].append(item.group(1).strip())
            continue
        pending = None

        match = _KEY_LINE.match(line)
        if not match or match.group(1) in values:
            continue
        key, rest = match.group(1), match.group(2).strip()
        if rest:
            values[key] = rest
        else:
            pending = key
    return values


def decode_front_matter(region: str) -> Tuple[Dict[str, Any], Set[str], bool]:
    """
    Decode the front-matter region.

    Returns (values, line_keys, yaml_ok): ``line_keys`` names the keys whose
    values came from the line scanner rather than YAML, and ``yaml_ok`` is
    False when the region was not a valid YAML mapping.
    """
    if not region.strip():
        return {}, set(), True

    try:
        loaded = _yaml.load(region, Loader=_TextScalarLoader)
    except yaml.YAMLError as e:
        logger.debug(f"Front matter is not valid YAML, scanning lines instead: {e}")
        scanned = scan_key_values(region)
        return scanned, set(scanned), False

    scanned = scan_key_values(region)
    if loaded is None:  # only comments
        return {}, set(), True
    if not isinstance(loaded, dict):
        return scanned, set(scanned), False

    values = {str(key): value for key, value in loaded.items()}
    line_keys = set()
    # YAML can succeed yet swallow a recognized key into another scalar
    for key, value in scanned.items():
        if key.lower() in RECOGNIZED_KEYS and key not in values:
            values[key] = value
            line_keys.add(key)
    return values, line_keys, True


def duplicate_keys(region: str) -> List[str]:
    """Recognized field names given more than once, in the order they repeat."""
    seen: Set[str] = set()
    repeated: List[str] = []
    for line in map(_line_text, _split_lines(region)):
        match = _KEY_LINE.match(line)
        if not match:
            continue
        name = match.group(1).lower()
        if name not in RECOGNIZED_KEYS:
            continue
        if name in seen and name not in repeated:
            repeated.append(name)
        seen.add(name)
    return repeated


def _recognized(values: Dict[str, Any]) -> Dict[str, str]:
    """Map each recognized field name to the first source key spelling it."""
    found: Dict[str, str] = {}
    for key in values:
        name = key.lower()
        if name in RECOGNIZED_KEYS and name not in found:
            found[name] = key
    return found


def build_front_matter(values: Dict[str, Any], line_keys: Set[str]) -> FrontMatter:
    found = _recognized(values)

    def value_of(name: str) -> Any:
        return values[found[name]] if name in found else None

    return FrontMatter(
        title=coerce_title(
            value_of("title"), from_line=found.get("title") in line_keys
        ),
        date=coerce_date(value_of("date")),
        draft=coerce_draft(value_of("draft")),
        tags=coerce_tags(value_of("tags")),
        extra={key: value for key, value in values.items() if key not in found.values()},
    )


def _starts_with_stray_block(body: str) -> bool:
    """True when the body opens with what looks like another front-matter block."""
    lines = [_line_text(line) for line in _split_lines(body)[:10] if line.strip()][:2]
    if lines and is_delimiter(lines[0]):
        lines = lines[1:]
    if not lines:
        return False
    match = _KEY_LINE.match(lines[0])
    return bool(match) and match.group(1).lower() in RECOGNIZED_KEYS


def collect_diagnostics(
    front_matter: FrontMatter,
    mode: FrontMatterMode,
    yaml_ok: bool,
    body: str,
    duplicates: Sequence[str] = (),
) -> List[Diagnostic]:
    diagnostics: List[Diagnostic] = []

    if mode == FrontMatterMode.NONE:
        diagnostics.append(Diagnostic(message="no front matter found"))
    elif mode == FrontMatterMode.BARE:
        diagnostics.append(
            Diagnostic(message=f"front matter has no opening '{DELIMITER}' delimiter")
        )
    elif mode == FrontMatterMode.UNTERMINATED:
        diagnostics.append(
            Diagnostic(message=f"front matter is missing its closing '{DELIMITER}' delimiter")
        )

    if not yaml_ok:
        diagnostics.append(
            Diagnostic(message="front matter is not valid YAML; fields were recovered line by line")
        )

    for name in duplicates:
        diagnostics.append(
            Diagnostic(field=name, message=f"duplicate {name} key; keeping the first value")
        )

    if not front_matter.title.ok:
        detail = f" ({front_matter.title.raw})" if front_matter.title.raw else ""
        diagnostics.append(Diagnostic(field="title", message=f"missing title{detail}"))
    if front_matter.draft.status == FieldStatus.MALFORMED:
        diagnostics.append(
            Diagnostic(
                field="draft",
                message=f"unrecognised draft value {front_matter.draft.raw!r}; treating as false",
            )
        )
    for name in ("date", "tags"):
        result: FieldResult = getattr(front_matter, name)
        if result.status == FieldStatus.MALFORMED:
            diagnostics.append(
                Diagnostic(field=name, message=f"could not read {name} from {result.raw}")
            )

    if _starts_with_stray_block(body):
        diagnostics.append(
            Diagnostic(message="body starts with a second front matter block; kept as body text")
        )
    return diagnostics


def parse_post(text: Union[str, bytes]) -> ParsedPost:
    """Parse a post's raw text. Never raises."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8", errors="replace")
    elif not isinstance(text, str):
        text = "" if text is None else str(text)

    try:
        prefix, region, body, mode = split_front_matter(text)
        values, line_keys, yaml_ok = decode_front_matter(region)
        front_matter = build_front_matter(values, line_keys)

        post = Post(
            title=front_matter.title.value or "",
            date=front_matter.date.value,
            draft=bool(front_matter.draft.value),
            tags=list(front_matter.tags.value or []),
            body=body,
        )
        return ParsedPost(
            post=post,
            front_matter=front_matter,
            mode=mode,
            front_matter_text=prefix,
            diagnostics=collect_diagnostics(
                front_matter, mode, yaml_ok, body, duplicates=duplicate_keys(region)
            ),
        )
    except Exception as e:
        logger.warning(f"Failed to parse front matter, keeping whole text as body: {e}")
        return ParsedPost(
            post=Post(body=text),
            diagnostics=[Diagnostic(message=f"front matter could not be parsed: {e}")],
        )
