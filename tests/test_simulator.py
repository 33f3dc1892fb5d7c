"""Tests for the access simulator — the page-fault handling loop.

Each reference either hits a resident page or faults.  A fault fills a
free frame when one exists and otherwise evicts the policy's victim.
The logical clock advances once per reference, hit or fault.
"""

from collections.abc import Callable

import pytest

from pagesim.config import SimulationConfig
from pagesim.errors import ConfigurationError, PageOutOfRangeError
from pagesim.logging import LogLevel
from pagesim.memory.replacement import LFUPolicy, LRUPolicy
from pagesim.simulator import AccessSimulator, run_trace


def _lru(num_frames: int, max_pages: int = 64) -> AccessSimulator:
    return AccessSimulator(num_frames=num_frames, policy=LRUPolicy(), max_pages=max_pages)


def _lfu(num_frames: int, max_pages: int = 64) -> AccessSimulator:
    return AccessSimulator(num_frames=num_frames, policy=LFUPolicy(), max_pages=max_pages)


def _assert_consistent(sim: AccessSimulator) -> None:
    """Frame table and page table should describe the same residency."""
    from_frames = {page: frame for frame, page in sim.frames.occupied()}
    assert from_frames == sim.page_table.resident_pages()


# -- Scenarios ---------------------------------------------------------------


class TestScenarios:
    """Worked traces with hand-checked fault counts."""

    def test_lru_two_frames(self) -> None:
        """LRU, 2 frames, [1, 2, 3, 1]: every reference faults."""
        result = _lru(2).run([1, 2, 3, 1])
        expected_faults = 4
        expected_evictions = 2
        assert result.faults == expected_faults
        assert result.evictions == expected_evictions
        # 3 replaced 1 in frame 0; the second 1 replaced 2 in frame 1
        assert result.resident == {3: 0, 1: 1}

    def test_lfu_one_frame(self) -> None:
        """LFU, 1 frame, [5, 5, 6]: load, hit, then evict the sole page."""
        result = _lfu(1).run([5, 5, 6])
        expected_faults = 2
        assert result.faults == expected_faults
        assert result.evictions == 1
        assert result.hits == 1
        assert result.resident == {6: 0}

    def test_lru_keeps_recently_used(self) -> None:
        """Re-touching page 1 makes page 2 the LRU victim."""
        sim = _lru(2)
        sim.run([1, 2, 1])
        outcome = sim.access(3)
        assert outcome.evicted == 2
        assert outcome.frame == 1

    def test_lfu_keeps_frequently_used(self) -> None:
        """A page used three times survives while a once-used page is evicted."""
        sim = _lfu(2)
        sim.run([1, 1, 1, 2])
        outcome = sim.access(3)
        assert outcome.evicted == 2
        assert sim.page_table.is_resident(1)

    def test_lfu_evicts_first_filled_on_ties(self) -> None:
        """With equal counts LFU falls back to frame order (FIFO on fill)."""
        sim = _lfu(3)
        sim.run([7, 8, 9])
        outcome = sim.access(10)
        assert outcome.evicted == 7
        assert outcome.frame == 0

    def test_lfu_reloaded_page_counts_from_zero(self) -> None:
        """An evicted page that returns starts over with a fresh count."""
        sim = _lfu(2)
        sim.run([1, 1, 1, 2, 3])  # 3 evicts 2
        sim.access(2)  # evicts 3 (count 1, frame 1) rather than 1 (count 3)
        assert sim.page_table.use_count(2) == 1
        assert sim.page_table.is_resident(1)


# -- Properties --------------------------------------------------------------


class TestFaultProperties:
    """Invariants that hold for every trace."""

    @pytest.mark.parametrize("make", [_lru, _lfu])
    def test_first_reference_always_faults(self, make: Callable[[int], AccessSimulator]) -> None:
        """No page starts resident, so each first touch is a fault."""
        sim = make(4)
        seen: set[int] = set()
        for page in [3, 1, 3, 4, 1, 5, 9, 2, 6, 5, 3, 5]:
            outcome = sim.access(page)
            if page not in seen:
                assert outcome.fault
            seen.add(page)
            _assert_consistent(sim)

    def test_first_f_distinct_pages_never_evict(self) -> None:
        """Compulsory misses fill free frames in order without eviction."""
        sim = _lru(3)
        outcomes = [sim.access(page) for page in [10, 11, 10, 12]]
        assert [o.frame for o in outcomes] == [0, 1, 0, 2]
        assert all(o.evicted is None for o in outcomes)
        assert sim.evictions == 0
        nxt = sim.access(13)
        assert nxt.evicted is not None
        assert sim.evictions == 1

    def test_hits_are_idempotent_on_residency(self) -> None:
        """Repeated hits change only the usage metadata."""
        sim = _lru(2)
        sim.access(4)
        frame = sim.page_table.frame_of(4)
        faults = sim.faults
        for _ in range(5):
            outcome = sim.access(4)
            assert not outcome.fault
        assert sim.page_table.frame_of(4) == frame
        assert sim.faults == faults
        expected_uses = 6
        assert sim.page_table.use_count(4) == expected_uses

    def test_clock_advances_once_per_access(self) -> None:
        """The clock counts every reference and stamps the pre-increment value."""
        sim = _lru(1)
        sim.run([1, 1, 2])
        expected_clock = 3
        assert sim.clock == expected_clock
        assert sim.page_table.last_used(2) == expected_clock - 1

    def test_lru_victim_has_smallest_timestamp(self) -> None:
        """At each eviction the victim was the oldest resident page."""
        sim = _lru(3)
        trace = [1, 2, 3, 1, 4, 2, 5, 1, 2, 3, 4, 5]
        for page in trace:
            before = {p: sim.page_table.last_used(p) for p in sim.page_table.resident_pages()}
            outcome = sim.access(page)
            if outcome.evicted is not None:
                assert before[outcome.evicted] == min(before.values())

    def test_lfu_victim_has_smallest_count(self) -> None:
        """At each eviction the victim had the fewest uses."""
        sim = _lfu(3)
        trace = [1, 1, 2, 3, 3, 3, 4, 2, 5, 1, 6, 4]
        for page in trace:
            before = {p: sim.page_table.use_count(p) for p in sim.page_table.resident_pages()}
            outcome = sim.access(page)
            if outcome.evicted is not None:
                assert before[outcome.evicted] == min(before.values())

    @pytest.mark.parametrize("policy", ["LRU", "LFU"])
    def test_deterministic(self, policy: str) -> None:
        """Identical inputs should produce identical results."""
        config = SimulationConfig(num_frames=3, policy=policy)
        trace = [0, 4, 1, 4, 2, 4, 3, 4, 2, 4, 0, 4, 1, 4, 2, 4, 3, 4]
        assert run_trace(config, trace) == run_trace(config, trace)


# -- Errors and boundaries ---------------------------------------------------


class TestErrors:
    """Configuration and input failures."""

    def test_zero_frames_rejected(self) -> None:
        """A simulator with no frames cannot place any page."""
        with pytest.raises(ConfigurationError, match="positive integer"):
            _lru(0)

    def test_negative_frames_rejected(self) -> None:
        """Negative frame counts are rejected too."""
        with pytest.raises(ConfigurationError):
            _lfu(-2)

    def test_frames_beyond_address_space_rejected(self) -> None:
        """The frame table is never sized past the number of pages."""
        with pytest.raises(ConfigurationError, match="cannot exceed"):
            _lru(10**18, max_pages=8)

    def test_out_of_range_aborts(self) -> None:
        """The first out-of-range page aborts the run."""
        sim = _lru(2, max_pages=8)
        with pytest.raises(PageOutOfRangeError, match="No page 8"):
            sim.run([1, 8, 2])
        # the run stopped at the bad page
        assert sim.accesses == 1
        assert not sim.page_table.is_resident(2)

    def test_out_of_range_logged(self) -> None:
        """The aborting error is recorded in the event log."""
        sim = _lru(2, max_pages=8)
        with pytest.raises(PageOutOfRangeError):
            sim.access(100)
        errors = sim.logger.filter(min_level=LogLevel.ERROR)
        assert len(errors) == 1
        assert "100" in errors[0].message

    def test_from_config_validates_policy(self) -> None:
        """Unknown policy names fail before any access."""
        with pytest.raises(ConfigurationError):
            AccessSimulator.from_config(SimulationConfig(num_frames=2, policy="MRU"))


class TestEventLog:
    """The simulator records each access and each replacement."""

    def test_access_and_fault_messages(self) -> None:
        """Accesses log at DEBUG, replacements at INFO."""
        sim = _lru(1)
        sim.run([1, 2])
        messages = [entry.message for entry in sim.logger.entries]
        assert "page 1: access" in messages
        assert "page 2: access" in messages
        faults = sim.logger.filter(min_level=LogLevel.INFO)
        assert len(faults) == 1
        assert faults[0].message.startswith("PAGE FAULT accessing 2, replaced frame 1 of 1")

    def test_policy_choice_logged_under_policy_source(self) -> None:
        """The victim choice is attributed to the policy."""
        sim = _lfu(1)
        sim.run([1, 2])
        entries = sim.logger.filter(source="LFU")
        assert len(entries) == 1
        assert "timesUsed: 1" in entries[0].message

    def test_summary_line(self) -> None:
        """The result summary matches the CLI report format."""
        result = _lru(2).run([1, 2, 3, 1])
        assert result.summary() == "4 page faults encountered during simulation"
