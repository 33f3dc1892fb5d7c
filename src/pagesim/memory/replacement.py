"""Page replacement policies — choosing a victim frame.

When a page fault occurs and every frame is occupied, the simulator must
evict one resident page to make room.  Which one is the job of the
**replacement policy** (Strategy pattern, one class per algorithm):

    - **LRU** — evict the page whose last access is oldest.  Recency is
      read from each page's ``last_used`` logical timestamp.
    - **LFU** — evict the page accessed the fewest times since it was
      loaded.  When every resident page has the same count (for example
      right after the frames were first filled) the scan order makes LFU
      behave like FIFO.

Both policies scan the frames in ascending order and keep the first
minimum they see (strict ``<``), so ties go to the lowest frame index.

Policies are pure: they read the frame table and the page table and
return a frame index.  They keep no state of their own and never
mutate what they are given, which is why one instance can be shared
by any number of simulations.
"""

from typing import Protocol

from pagesim.errors import ConfigurationError, SimulationError
from pagesim.memory.frames import FrameTable
from pagesim.memory.page_table import PageTable

# ---------------------------------------------------------------------------
# Replacement Policy Protocol (Strategy pattern)
# ---------------------------------------------------------------------------


class ReplacementPolicy(Protocol):
    """Interface for victim selection algorithms."""

    name: str

    def select_victim(self, frames: FrameTable, page_table: PageTable) -> int:
        """Choose which frame to evict.

        Returns:
            The index of the victim frame.

        Raises:
            SimulationError: If no frame is occupied.

        """
        ...

    def describe(self, page_table: PageTable, page: int) -> str:
        """Return a short diagnostic naming the metric of *page*."""
        ...


def _first_minimum(frames: FrameTable, key: dict[int, int]) -> int:
    """Return the first frame (ascending) whose page has the smallest key."""
    occupied = frames.occupied()
    if not occupied:
        msg = "No resident pages to evict"
        raise SimulationError(msg)
    victim, best = occupied[0][0], key[occupied[0][1]]
    for frame, page in occupied[1:]:
        if key[page] < best:
            victim, best = frame, key[page]
    return victim


# ---------------------------------------------------------------------------
# LRU Policy
# ---------------------------------------------------------------------------


class LRUPolicy:
    """Least Recently Used — evict the page with the oldest ``last_used``."""

    name = "LRU"

    def select_victim(self, frames: FrameTable, page_table: PageTable) -> int:
        """Return the frame holding the least recently used page."""
        times = {page: page_table.last_used(page) for _, page in frames.occupied()}
        return _first_minimum(frames, times)

    def describe(self, page_table: PageTable, page: int) -> str:
        """Report the page's last access time."""
        return f"LRUTime: {page_table.last_used(page)}"


# ---------------------------------------------------------------------------
# LFU Policy
# ---------------------------------------------------------------------------


class LFUPolicy:
    """Least Frequently Used — evict the page with the lowest ``use_count``."""

    name = "LFU"

    def select_victim(self, frames: FrameTable, page_table: PageTable) -> int:
        """Return the frame holding the least frequently used page."""
        counts = {page: page_table.use_count(page) for _, page in frames.occupied()}
        return _first_minimum(frames, counts)

    def describe(self, page_table: PageTable, page: int) -> str:
        """Report the page's use count."""
        return f"timesUsed: {page_table.use_count(page)}"


_POLICIES: dict[str, type[LRUPolicy] | type[LFUPolicy]] = {
    LRUPolicy.name: LRUPolicy,
    LFUPolicy.name: LFUPolicy,
}

POLICIES: tuple[str, ...] = tuple(sorted(_POLICIES))


def policy_for(name: str) -> ReplacementPolicy:
    """Return a policy instance for *name* (``"LRU"`` or ``"LFU"``, case-sensitive).

    Raises:
        ConfigurationError: If the name is not a known policy.

    """
    cls = _POLICIES.get(name)
    if cls is None:
        msg = f"Unknown policy {name!r}, must be either LRU or LFU"
        raise ConfigurationError(msg)
    return cls()
