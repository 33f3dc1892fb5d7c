"""Access simulator — the page-fault handling loop.

The simulator replays a trace of page references one at a time.  For
each reference it:

    1. Validates the page number against the address space.
    2. On a **hit** (page already resident) does nothing but bookkeeping.
    3. On a **fault** looks for a free frame; if every frame is occupied
       it asks the replacement policy for a victim, evicts the victim's
       page, and reuses its frame.
    4. Loads the page into the chosen frame.
    5. Records the access: stamps ``last_used`` with the logical clock,
       advances the clock, and bumps the page's ``use_count``.

Step 5 is shared by the hit path and the fault path and runs exactly
once per reference.

Every access to a non-resident page counts as a fault, including the
compulsory misses that fill free frames.  Faults that displaced another
page are additionally counted as evictions.

All state (page table, frame table, clock, counters, log) belongs to
one ``AccessSimulator`` instance; two simulators never share anything.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pagesim.config import SimulationConfig, check_sizes
from pagesim.errors import SimulationError
from pagesim.logging import Logger, LogLevel
from pagesim.memory.frames import FrameTable
from pagesim.memory.page_table import MAX_PAGES, PageTable
from pagesim.memory.replacement import ReplacementPolicy, policy_for

_SOURCE = "simulator"


@dataclass(frozen=True)
class AccessResult:
    """Outcome of a single page reference.

    Attributes:
        page: The page that was referenced.
        fault: True if the page was not resident.
        frame: The frame holding the page after the access.
        evicted: The page displaced to make room, if any.

    """

    page: int
    fault: bool
    frame: int
    evicted: int | None = None


@dataclass(frozen=True)
class SimulationResult:
    """Totals for a complete run."""

    policy: str
    num_frames: int
    accesses: int
    faults: int
    evictions: int
    resident: dict[int, int]

    @property
    def hits(self) -> int:
        """Return the number of references that found their page resident."""
        return self.accesses - self.faults

    def summary(self) -> str:
        """Return the one-line fault report."""
        return f"{self.faults} page faults encountered during simulation"


class AccessSimulator:
    """Drive page references through a page table and frame table."""

    def __init__(
        self,
        *,
        num_frames: int,
        policy: ReplacementPolicy,
        max_pages: int = MAX_PAGES,
        logger: Logger | None = None,
    ) -> None:
        """Create a simulator with every page non-resident and every frame free.

        Args:
            num_frames: Number of physical frames (must be at least 1).
            policy: The replacement policy consulted when no frame is free.
            max_pages: Size of the page address space.
            logger: Event log to append to (a fresh one if omitted).

        Raises:
            ConfigurationError: If num_frames is not between 1 and max_pages,
                or max_pages is outside the supported range.

        """
        check_sizes(num_frames=num_frames, max_pages=max_pages)
        self._page_table = PageTable(max_pages=max_pages)
        self._frames = FrameTable(num_frames=num_frames)
        self._policy = policy
        self._logger = logger if logger is not None else Logger()
        self._clock = 0
        self._faults = 0
        self._evictions = 0
        self._accesses = 0

    @classmethod
    def from_config(cls, config: SimulationConfig, *, logger: Logger | None = None) -> AccessSimulator:
        """Build a simulator from a validated configuration."""
        config.validate()
        return cls(
            num_frames=config.num_frames,
            policy=policy_for(config.policy),
            max_pages=config.max_pages,
            logger=logger,
        )

    @property
    def page_table(self) -> PageTable:
        """Return the page table."""
        return self._page_table

    @property
    def frames(self) -> FrameTable:
        """Return the frame table."""
        return self._frames

    @property
    def policy(self) -> ReplacementPolicy:
        """Return the replacement policy."""
        return self._policy

    @property
    def logger(self) -> Logger:
        """Return the event log."""
        return self._logger

    @property
    def clock(self) -> int:
        """Return the logical clock (number of accesses processed)."""
        return self._clock

    @property
    def faults(self) -> int:
        """Return the number of accesses to non-resident pages."""
        return self._faults

    @property
    def evictions(self) -> int:
        """Return the number of faults that displaced a resident page."""
        return self._evictions

    @property
    def accesses(self) -> int:
        """Return the number of references processed."""
        return self._accesses

    @property
    def hits(self) -> int:
        """Return the number of references that found their page resident."""
        return self._accesses - self._faults

    def access(self, page: int) -> AccessResult:
        """Process one page reference.

        Raises:
            PageOutOfRangeError: If the page is outside the address space.

        """
        self._logger.log(LogLevel.DEBUG, f"page {page}: access", source=_SOURCE, time=self._clock)
        try:
            self._page_table.check(page)
        except SimulationError as e:
            self._logger.log(LogLevel.ERROR, str(e), source=_SOURCE, time=self._clock)
            raise

        frame = self._page_table.frame_of(page)
        if frame is not None:
            self._record_access(page)
            return AccessResult(page=page, fault=False, frame=frame)

        self._faults += 1
        evicted = None
        frame = self._frames.find_free()
        if frame is None:
            frame, evicted = self._replace(page)
        self._frames.occupy(frame=frame, page=page)
        self._page_table.load(page=page, frame=frame)
        self._record_access(page)
        return AccessResult(page=page, fault=True, frame=frame, evicted=evicted)

    def _replace(self, page: int) -> tuple[int, int]:
        """Pick a victim frame with the policy and free it."""
        self._evictions += 1
        frame = self._policy.select_victim(self._frames, self._page_table)
        victim = self._frames.occupant(frame)
        if victim is None:
            msg = f"{self._policy.name} selected free frame {frame}"
            raise SimulationError(msg)
        self._logger.log(
            LogLevel.DEBUG,
            f"{self._policy.name}: fr # {frame + 1}, "
            f"{self._policy.describe(self._page_table, victim)}",
            source=self._policy.name,
            time=self._clock,
        )
        self._logger.log(
            LogLevel.INFO,
            f"PAGE FAULT accessing {page}, replaced frame {frame + 1} "
            f"of {self._frames.num_frames} (page {victim})",
            source=_SOURCE,
            time=self._clock,
        )
        self._page_table.evict(page=victim)
        self._frames.vacate(frame=frame)
        return frame, victim

    def _record_access(self, page: int) -> None:
        self._page_table.record_access(page=page, time=self._clock)
        self._clock += 1
        self._accesses += 1

    def run(self, pages: Iterable[int]) -> SimulationResult:
        """Feed every page in *pages* through ``access`` in order."""
        for page in pages:
            self.access(page)
        return self.result()

    def result(self) -> SimulationResult:
        """Return the totals accumulated so far."""
        return SimulationResult(
            policy=self._policy.name,
            num_frames=self._frames.num_frames,
            accesses=self._accesses,
            faults=self._faults,
            evictions=self._evictions,
            resident=self._page_table.resident_pages(),
        )


def run_trace(
    config: SimulationConfig,
    pages: Iterable[int],
    *,
    logger: Logger | None = None,
) -> SimulationResult:
    """Run a whole trace under *config* and return the totals."""
    return AccessSimulator.from_config(config, logger=logger).run(pages)
