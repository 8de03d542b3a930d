import datetime
import re
from typing import Optional

from postmatter.services.fields import strip_quotes

_FRACTION = re.compile(r"\.(\d+)")
_SPACE_SEPARATED = re.compile(r"^(\d{4}-\d{2}-\d{2})\s+(\d)")
_SPACED_OFFSET = re.compile(r"\s+([+-]\d{2}:?\d{2})$")


def resolve_date(raw: Optional[str]) -> Optional[datetime.datetime]:
    """
    Best-effort parse of a front-matter date for sorting and display.

    Accepts ISO-8601-like values with any number of fractional-second digits,
    a ``Z`` suffix, a space instead of ``T``, or a bare date. Naive values are
    taken as UTC. Returns None instead of raising when the value is unusable.
    """
    if not raw:
        return None

    text = strip_quotes(raw)
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    text = _SPACE_SEPARATED.sub(r"\1T\2", text)
    text = _SPACED_OFFSET.sub(r"\1", text)
    # fromisoformat wants exactly 3 or 6 fractional digits on older Pythons
    text = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)

    try:
        parsed = datetime.datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed
