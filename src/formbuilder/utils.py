"""Utility functions for the form builder"""

import logging
import math
import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

UTC = ZoneInfo("UTC")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def canonicalify(p: Path | str) -> Path:
    return Path(p).expanduser().resolve()


def ensure_path(p: Path | str) -> Path:
    path = canonicalify(p)
    path.mkdir(parents=True, exist_ok=True)
    return path


def parse_int(value: Any) -> Optional[int]:
    """Parse the leading integer of a value, the way HTML number inputs are read.

    Args:
        value: Raw input (string, int, float or anything else)

    Returns:
        The parsed integer, or None when the input carries no leading integer.

    Examples:
        >>> parse_int("12")
        12
        >>> parse_int(" 7px")
        7
        >>> parse_int("abc") is None
        True
        >>> parse_int(3.9)
        3
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None

    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def parse_number(value: Any) -> Optional[float | int]:
    """Parse a submitted number, keeping integers integral."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None

    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def split_lines(blob: Any) -> list[str]:
    """Split a text blob into non-empty, trimmed lines.

    Examples:
        >>> split_lines("Red\\n  Green \\n\\nBlue")
        ['Red', 'Green', 'Blue']
    """
    if blob is None:
        return []
    if isinstance(blob, (list, tuple)):
        lines = [str(item) for item in blob]
    else:
        lines = str(blob).splitlines()
    return [line.strip() for line in lines if line.strip()]


def get_now() -> datetime:
    return datetime.now(UTC)


def write_text_atomic(path: Path, content: str) -> None:
    """Write a file through a temporary sibling so readers never see half a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix(path.suffix + ".tmp")
    temp_path.write_text(content, encoding="utf-8")
    shutil.move(str(temp_path), str(path))
