"""Page table — residency and usage metadata for every page.

A single-level page table has one entry per page in the address space,
whether or not the page is currently in RAM.  Each entry records:

    - **frame** — which physical frame holds the page, or ``None`` when
      the page is not resident.
    - **last_used** — the logical time of the most recent access, which
      orders pages by recency for LRU.
    - **use_count** — how many times the page was accessed since it last
      became resident, which orders pages by frequency for LFU.

The table is sized once (``max_pages`` entries) and never grows.  Entries
are not created or destroyed during a run; residency toggles in place.

Design choices:
    - **None for absence** instead of a ``-1`` sentinel, so "not resident"
      can never be confused with a frame index.
    - **Bounds checked on every call** — a page outside the address space
      raises ``PageOutOfRangeError`` instead of indexing past the table.
"""

from dataclasses import dataclass, replace

from pagesim.errors import PageOutOfRangeError

MAX_PAGES = 1024
MAX_PAGES_LIMIT = 1 << 20


@dataclass
class PageRecord:
    """One page-table entry.

    Attributes:
        frame: The frame holding this page, or None if not resident.
        last_used: Logical timestamp of the most recent access.
        use_count: Accesses since the page most recently became resident.

    """

    frame: int | None = None
    last_used: int = 0
    use_count: int = 0

    @property
    def resident(self) -> bool:
        """Return True if the page currently occupies a frame."""
        return self.frame is not None


class PageTable:
    """Fixed-size table of ``PageRecord`` entries indexed by page number."""

    def __init__(self, *, max_pages: int = MAX_PAGES) -> None:
        """Create a table with every page non-resident.

        Args:
            max_pages: Number of distinct pages in the address space.

        """
        self._max_pages = max_pages
        self._records = [PageRecord() for _ in range(max_pages)]

    @property
    def max_pages(self) -> int:
        """Return the size of the address space in pages."""
        return self._max_pages

    def check(self, page: int) -> None:
        """Validate that *page* lies inside the address space.

        Raises:
            PageOutOfRangeError: If the page is negative or >= max_pages.

        """
        if not 0 <= page < self._max_pages:
            msg = f"No page {page} in current page file (valid pages are 0-{self._max_pages - 1})"
            raise PageOutOfRangeError(msg)

    def _entry(self, page: int) -> PageRecord:
        self.check(page)
        return self._records[page]

    def record(self, page: int) -> PageRecord:
        """Return a copy of the entry for *page*."""
        return replace(self._entry(page))

    def is_resident(self, page: int) -> bool:
        """Return True if *page* currently occupies a frame."""
        return self._entry(page).resident

    def frame_of(self, page: int) -> int | None:
        """Return the frame holding *page*, or None."""
        return self._entry(page).frame

    def last_used(self, page: int) -> int:
        """Return the logical time *page* was last accessed."""
        return self._entry(page).last_used

    def use_count(self, page: int) -> int:
        """Return the accesses to *page* since it last became resident."""
        return self._entry(page).use_count

    def load(self, *, page: int, frame: int) -> None:
        """Mark *page* as resident in *frame* and restart its use count."""
        entry = self._entry(page)
        entry.frame = frame
        entry.use_count = 0

    def evict(self, *, page: int) -> None:
        """Mark *page* as not resident (no-op if it already isn't)."""
        self._entry(page).frame = None

    def record_access(self, *, page: int, time: int) -> None:
        """Stamp an access to *page* at logical *time*."""
        entry = self._entry(page)
        entry.use_count += 1
        entry.last_used = time

    def resident_pages(self) -> dict[int, int]:
        """Return a page → frame mapping of every resident page."""
        return {
            page: entry.frame
            for page, entry in enumerate(self._records)
            if entry.frame is not None
        }

    def __len__(self) -> int:
        """Return the number of resident pages."""
        return sum(1 for entry in self._records if entry.resident)
