"""Line classifier for the core installer output protocol.

Control prefixes are case-sensitive and checked in this order:

1. RSYNC_PROGRESS: tag anywhere in the line (tagged transfer progress)
2. MB/s, KB/s or GB/s anywhere in the line (raw transfer progress)
3. PROGRESS:<percent>:<message>
4. ERROR:<message>
5. SUCCESS:
6. INFO:<message>
7. free text

The classifier is pure. Callers apply the returned events.
"""

from typing import List, Optional

from locinstaller.models.events import (
    ErrorNotice,
    LogLine,
    LogLineReplace,
    OutputEvent,
    ProgressUpdate,
    StatusUpdate,
)
from locinstaller.services.progress import parse_raw_progress, parse_tagged_progress

PROGRESS_PREFIX = "PROGRESS:"
ERROR_PREFIX = "ERROR:"
SUCCESS_PREFIX = "SUCCESS:"
INFO_PREFIX = "INFO:"

# Free text shorter than this always updates the status label.
STATUS_MAX_LENGTH = 100

COMPLETE_PROGRESS_MESSAGE = "Installation complete!"
COMPLETE_STATUS_MESSAGE = "Installation completed successfully!"


def parse_progress_command(payload: str) -> Optional[ProgressUpdate]:
    """Parse "<percent>:<message>" from a PROGRESS: line.

    Returns:
        ProgressUpdate, or None if the separator is missing or the percent
        is not an integer in [0, 100]
    """
    percent_text, sep, message = payload.partition(":")
    if not sep or not percent_text.isascii():
        return None
    try:
        percent = int(percent_text)
    except ValueError:
        return None
    if not 0 <= percent <= 100:
        return None
    return ProgressUpdate(percent=percent, message=message)


def _classify_transfer(line: str) -> Optional[List[OutputEvent]]:
    tagged = parse_tagged_progress(line)
    if tagged is not None:
        return [
            LogLineReplace(
                text=f"Copying files: {tagged.percent} {tagged.speed} {tagged.elapsed}"
            ),
            StatusUpdate(message=f"Copying system files... {tagged.percent} {tagged.speed}"),
        ]

    raw = parse_raw_progress(line)
    if raw is not None:
        return [LogLineReplace(text=f"Copying: {raw.percent} {raw.speed}")]

    return None


def classify_line(line: str) -> List[OutputEvent]:
    """Map one newline-stripped output line to UI events.

    Args:
        line: Output line after carriage-return cleanup

    Returns:
        Events in the order they must be applied (possibly empty)
    """
    transfer = _classify_transfer(line)
    if transfer is not None:
        return transfer

    if line.startswith(PROGRESS_PREFIX):
        # Logged even when the percent is rejected.
        events: List[OutputEvent] = [LogLine(text=line)]
        update = parse_progress_command(line[len(PROGRESS_PREFIX):])
        if update is not None:
            events.append(update)
        return events

    if line.startswith(ERROR_PREFIX):
        return [ErrorNotice(message=line[len(ERROR_PREFIX):])]

    if line.startswith(SUCCESS_PREFIX):
        return [
            ProgressUpdate(percent=100, message=COMPLETE_PROGRESS_MESSAGE),
            StatusUpdate(message=COMPLETE_STATUS_MESSAGE, marks_complete=True),
        ]

    if line.startswith(INFO_PREFIX):
        return [StatusUpdate(message=line[len(INFO_PREFIX):])]

    if not line:
        return []

    events = [LogLine(text=line)]
    if ":" in line or len(line) < STATUS_MAX_LENGTH:
        events.append(StatusUpdate(message=line))
    return events
