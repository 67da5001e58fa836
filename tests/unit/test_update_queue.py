"""Unit tests for UpdateQueue."""

import threading

import pytest

from locinstaller.models.events import InstallSucceeded, LogLine, StatusUpdate
from locinstaller.services.update_queue import UpdateQueue


@pytest.mark.unit
class TestUpdateQueue:

    def test_drain_empty(self):
        queue = UpdateQueue()

        assert queue.drain() == []
        assert queue.empty()

    def test_fifo_order(self):
        queue = UpdateQueue()
        events = [LogLine(text=str(i)) for i in range(5)]

        queue.put_all(events)

        assert len(queue) == 5
        assert queue.drain() == events
        assert queue.empty()

    def test_drain_removes_events(self):
        queue = UpdateQueue()
        queue.put(StatusUpdate(message="a"))

        queue.drain()

        assert queue.drain() == []

    def test_producer_thread_order_preserved(self):
        """Events from a concurrent producer arrive complete and in order."""
        queue = UpdateQueue()
        count = 2000

        def produce():
            for i in range(count):
                queue.put(LogLine(text=str(i)))
            queue.put(InstallSucceeded())

        producer = threading.Thread(target=produce)
        producer.start()

        received = []
        while not received or not received[-1].is_terminal:
            received.extend(queue.drain())
        producer.join()

        assert [e.text for e in received[:-1]] == [str(i) for i in range(count)]
        assert isinstance(received[-1], InstallSucceeded)
        assert queue.empty()
