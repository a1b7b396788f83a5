from __future__ import annotations

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


def parse_tag(raw: Any, *, where: str = "tag") -> Optional[int]:
    """Parse a client-presented sync tag.

    Absent or blank -> None. Anything that is not a non-negative integer is
    treated as absent so the client re-downloads instead of missing a change.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    s = str(raw).strip()
    if not s:
        return None
    try:
        v = int(s)
    except ValueError:
        logger.warning(f"ignoring malformed {where}: {s[:64]!r}")
        return None
    if v < 0:
        logger.warning(f"ignoring negative {where}: {v}")
        return None
    return v


def since_value(tag: Optional[int]) -> int:
    return int(tag or 0)
