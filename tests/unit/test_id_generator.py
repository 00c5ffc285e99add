"""Unit tests for record id generation."""

from __future__ import annotations

import threading

import pytest

from jsondb.domain.services import RecordIdGenerator


class FakeClock:
    """Millisecond clock under test control."""

    def __init__(self, now: int = 1_718_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.mark.unit
class TestRecordIdGenerator:
    """Tests for RecordIdGenerator."""

    def test_id_is_millisecond_timestamp(self) -> None:
        ids = RecordIdGenerator(clock=FakeClock(1_718_000_000_000))

        assert ids.next_id() == "1718000000000"

    def test_same_millisecond_gets_suffix(self) -> None:
        ids = RecordIdGenerator(clock=FakeClock(1000))

        assert [ids.next_id() for _ in range(3)] == ["1000", "1000-1", "1000-2"]

    def test_new_millisecond_resets_counter(self) -> None:
        clock = FakeClock(1000)
        ids = RecordIdGenerator(clock=clock)
        ids.next_id()
        ids.next_id()

        clock.now = 1001

        assert ids.next_id() == "1001"

    def test_clock_moving_backwards(self) -> None:
        clock = FakeClock(2000)
        ids = RecordIdGenerator(clock=clock)
        first = ids.next_id()

        clock.now = 1500
        second = ids.next_id()

        assert first == "2000"
        assert second == "2000-1"

    def test_existing_ids_skipped(self) -> None:
        ids = RecordIdGenerator(clock=FakeClock(1000))

        assert ids.next_id(existing={"1000", "1000-1"}) == "1000-2"

    def test_ids_from_other_generator_skipped(self) -> None:
        """Two generators on the same table still produce distinct ids."""
        first = RecordIdGenerator(clock=FakeClock(1000))
        second = RecordIdGenerator(clock=FakeClock(1000))
        issued = {first.next_id()}

        assert second.next_id(existing=issued) not in issued

    def test_wall_clock_default(self) -> None:
        record_id = RecordIdGenerator().next_id()

        assert record_id.isdigit()
        assert len(record_id) >= 13

    def test_thread_safety(self) -> None:
        ids = RecordIdGenerator(clock=FakeClock(1000))
        issued: list[str] = []
        lock = threading.Lock()

        def worker() -> None:
            for _ in range(50):
                record_id = ids.next_id()
                with lock:
                    issued.append(record_id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(issued) == 400
        assert len(set(issued)) == 400
