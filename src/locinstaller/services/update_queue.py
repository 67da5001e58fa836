"""Ordered worker → UI channel for output events."""

import queue
from typing import Iterable, List

from locinstaller.models.events import OutputEvent


class UpdateQueue:
    """Unbounded FIFO of output events.

    One producer (the install worker thread) and one consumer (the UI
    context). put() never blocks, so a slow UI cannot stall the worker
    and, through it, the installer's stdout pipe.
    """

    def __init__(self):
        """Initialize an empty queue."""
        self._queue: "queue.SimpleQueue[OutputEvent]" = queue.SimpleQueue()

    def put(self, event: OutputEvent) -> None:
        self._queue.put(event)

    def put_all(self, events: Iterable[OutputEvent]) -> None:
        """Enqueue events preserving their order."""
        for event in events:
            self._queue.put(event)

    def drain(self) -> List[OutputEvent]:
        """Remove and return every event queued so far, oldest first.

        Events posted while draining are left for the next drain.
        """
        drained: List[OutputEvent] = []
        for _ in range(self._queue.qsize()):
            try:
                drained.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return drained

    def empty(self) -> bool:
        return self._queue.empty()

    def __len__(self) -> int:
        return self._queue.qsize()
