"""Transfer progress extraction from rsync-style output."""

import re
from dataclasses import dataclass
from typing import Optional

PROGRESS_TAG = "RSYNC_PROGRESS:"
RATE_UNITS = ("MB/s", "KB/s", "GB/s")

DEFAULT_PERCENT = "0%"
DEFAULT_SPEED = "0.0MB/s"
DEFAULT_ELAPSED = "0:00:00"

# Display field widths; longer raw speed tokens fall back to the default.
MAX_SPEED_LENGTH = 19

_RATE_SUFFIX = "B/s"
_SPEED_CHARS = frozenset("0123456789.MKG")
_PERCENT_RE = re.compile(r"([0-9]+)%")


@dataclass(frozen=True)
class TransferProgress:
    """Display strings for one transfer progress line."""

    percent: str = DEFAULT_PERCENT
    speed: str = DEFAULT_SPEED
    elapsed: str = DEFAULT_ELAPSED


def parse_tagged_progress(line: str) -> Optional[TransferProgress]:
    """Parse a line carrying the RSYNC_PROGRESS: tag.

    Format: "RSYNC_PROGRESS: 12% 10.5MB/s 0:01:23". Missing fields keep
    their defaults. Values are trusted verbatim.

    Returns:
        TransferProgress, or None if the line has no tag
    """
    index = line.find(PROGRESS_TAG)
    if index < 0:
        return None

    fields = line[index + len(PROGRESS_TAG):].split()
    defaults = (DEFAULT_PERCENT, DEFAULT_SPEED, DEFAULT_ELAPSED)
    percent, speed, elapsed = (
        fields[i] if i < len(fields) else defaults[i] for i in range(3)
    )
    return TransferProgress(percent=percent, speed=speed, elapsed=elapsed)


def has_rate_unit(line: str) -> bool:
    return any(unit in line for unit in RATE_UNITS)


def extract_percent(line: str) -> str:
    """First ASCII digit run immediately followed by '%', normalized (e.g. "07%" → "7%").

    Not range-checked; the digits are kept as text so any length is accepted.
    """
    match = _PERCENT_RE.search(line)
    if match is None:
        return DEFAULT_PERCENT
    digits = match.group(1).lstrip("0") or "0"
    return f"{digits}%"


def extract_speed(line: str) -> str:
    """Speed token ending at the first "B/s" (e.g. "10.5MB/s")."""
    end = line.find(_RATE_SUFFIX)
    if end < 0:
        return DEFAULT_SPEED

    start = end
    while start > 0 and line[start - 1] in _SPEED_CHARS:
        start -= 1

    token = line[start:end + len(_RATE_SUFFIX)]
    if len(token) > MAX_SPEED_LENGTH:
        return DEFAULT_SPEED
    return token


def parse_raw_progress(line: str) -> Optional[TransferProgress]:
    """Recover percent and speed from untagged transfer output.

    Returns:
        TransferProgress (elapsed left at default), or None if the line
        has no byte-rate unit
    """
    if not has_rate_unit(line):
        return None
    return TransferProgress(percent=extract_percent(line), speed=extract_speed(line))
