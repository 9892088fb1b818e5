import logging
from datetime import datetime
from typing import Optional

from .errors import DateParseFailure

logger = logging.getLogger(__name__)


def parse_local_datetime(raw: Optional[str]) -> Optional[datetime]:
    """Parse a ``datetime-local`` form value.

    Accepts ``YYYY-MM-DDTHH:MM[:SS]`` and the same with a space in place of
    the ``T``. Blank input means the field is unset and returns ``None``.
    Anything else raises :class:`DateParseFailure`.
    """
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None

    for candidate in (value, value.replace(" ", "T", 1)):
        try:
            parsed = datetime.fromisoformat(candidate)
        except ValueError:
            continue
        if "T" not in candidate or parsed.tzinfo is not None:
            # local timestamps only: no bare dates, no offsets
            continue
        return parsed
    raise DateParseFailure(raw)


def lenient_datetime(raw: Optional[str], field: str = "date") -> Optional[datetime]:
    """Like :func:`parse_local_datetime` but an unparseable value leaves the field unset."""
    try:
        return parse_local_datetime(raw)
    except DateParseFailure:
        logger.warning("Failed to parse %s: %r", field, raw)
        return None
