import datetime
from typing import Any

from postmatter.schemas.post import FieldResult, FieldStatus

# Straight and typographic quote characters authors paste into titles and tags.
QUOTE_CHARS = "\"'`“”„‟‘’‚‛«»‹›"

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


def strip_quotes(text: str) -> str:
    """Trim whitespace and any run of quote characters from both ends."""
    return text.strip().strip(QUOTE_CHARS).strip()


def strip_surrounding_quotes(text: str) -> str:
    """Remove one pair of surrounding quotes, even if the two sides differ."""
    text = text.strip()
    if len(text) >= 2 and text[0] in QUOTE_CHARS and text[-1] in QUOTE_CHARS:
        return text[1:-1].strip()
    return text


def unquote_line_value(text: str) -> str:
    """
    Extract a scalar from the raw remainder of a ``key: value`` line.

    A value opening with a quote character is taken between that quote and the
    last quote character on the line; the two need not match, so
    ``"Moves”`` and ``“Moves"`` both give ``Moves``. An unclosed quote is
    dropped. Anything else is returned trimmed, unchanged.
    """
    text = text.strip()
    if not text or text[0] not in QUOTE_CHARS:
        return text
    inner = text[1:]
    last = max(inner.rfind(q) for q in QUOTE_CHARS)
    if last != -1:
        inner = inner[:last]
    return inner.strip()


def coerce_title(value: Any, *, from_line: bool = False) -> FieldResult:
    if value is None:
        return FieldResult(status=FieldStatus.MISSING, value="")
    if isinstance(value, str):
        title = unquote_line_value(value) if from_line else strip_surrounding_quotes(value)
        if not title:
            return FieldResult(status=FieldStatus.MISSING, value="", raw=value)
        return FieldResult(status=FieldStatus.OK, value=title)
    if isinstance(value, (int, float, bool, datetime.date)):
        return FieldResult(status=FieldStatus.OK, value=str(value))
    return FieldResult(status=FieldStatus.MALFORMED, value="", raw=repr(value))


def coerce_date(value: Any) -> FieldResult:
    """Keep the date exactly as written; parsing is left to consumers."""
    if value is None:
        return FieldResult(status=FieldStatus.MISSING)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return FieldResult(status=FieldStatus.OK, value=value.isoformat())
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return FieldResult(status=FieldStatus.OK, value=str(value))
    if isinstance(value, str):
        date = strip_quotes(value)
        if not date:
            return FieldResult(status=FieldStatus.MISSING, raw=value)
        return FieldResult(status=FieldStatus.OK, value=date)
    return FieldResult(status=FieldStatus.MALFORMED, raw=repr(value))


def coerce_draft(value: Any) -> FieldResult:
    if value is None:
        return FieldResult(status=FieldStatus.MISSING, value=False)
    if isinstance(value, bool):
        return FieldResult(status=FieldStatus.OK, value=value)
    if isinstance(value, int) and value in (0, 1):
        return FieldResult(status=FieldStatus.OK, value=bool(value))
    if isinstance(value, str):
        flag = strip_quotes(value).lower()
        if flag in _TRUE_VALUES:
            return FieldResult(status=FieldStatus.OK, value=True)
        if flag in _FALSE_VALUES:
            return FieldResult(status=FieldStatus.OK, value=False)
    return FieldResult(status=FieldStatus.MALFORMED, value=False, raw=str(value))


def coerce_tags(value: Any) -> FieldResult:
    """
    Normalise tags from a YAML sequence or a bracketed/comma-separated scalar.

    Order is preserved and duplicates are kept; each element loses surrounding
    whitespace and quotes, and empty elements are dropped.
    """
    if value is None:
        return FieldResult(status=FieldStatus.MISSING, value=[])
    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if item is None:
                continue
            if isinstance(item, (list, tuple, dict)):
                return FieldResult(status=FieldStatus.MALFORMED, value=[], raw=repr(value))
            tag = strip_quotes(str(item))
            if tag:
                items.append(tag)
        return FieldResult(status=FieldStatus.OK, value=items)
    if isinstance(value, str):
        return FieldResult(status=FieldStatus.OK, value=split_tags(value))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return FieldResult(status=FieldStatus.OK, value=[str(value)])
    return FieldResult(status=FieldStatus.MALFORMED, value=[], raw=repr(value))


def split_tags(text: str) -> list[str]:
    text = text.strip()
    if text.startswith("["):
        text = text[1:]
        if text.endswith("]"):
            text = text[:-1]
    return [tag for tag in (strip_quotes(part) for part in text.split(",")) if tag]
