"""Frame table — which page occupies each physical frame.

Physical memory is a fixed row of frames.  Each slot is either free
(``None``) or holds exactly one page number.  The frame table is the
reverse view of the page table: a page appears in slot *f* exactly
when its page-table entry says it lives in frame *f*.

Free frames are found with a linear scan from frame 0, so the first
``num_frames`` distinct pages fill the frames in index order before any
replacement policy is consulted.
"""


class FrameTable:
    """Fixed-length array of frame slots."""

    def __init__(self, *, num_frames: int) -> None:
        """Create a frame table with every slot free.

        Args:
            num_frames: Number of physical frames.

        """
        self._slots: list[int | None] = [None] * num_frames

    @property
    def num_frames(self) -> int:
        """Return the number of physical frames."""
        return len(self._slots)

    def find_free(self) -> int | None:
        """Return the lowest-numbered free frame, or None if all are occupied."""
        for frame, page in enumerate(self._slots):
            if page is None:
                return frame
        return None

    def is_full(self) -> bool:
        """Return True if no frame is free."""
        return self.find_free() is None

    def occupant(self, frame: int) -> int | None:
        """Return the page held by *frame*, or None if it is free."""
        return self._slots[frame]

    def occupy(self, *, frame: int, page: int) -> None:
        """Place *page* in *frame*."""
        self._slots[frame] = page

    def vacate(self, *, frame: int) -> None:
        """Free *frame*."""
        self._slots[frame] = None

    def occupied(self) -> list[tuple[int, int]]:
        """Return ``(frame, page)`` pairs for occupied frames in frame order."""
        return [(frame, page) for frame, page in enumerate(self._slots) if page is not None]

    def snapshot(self) -> list[int | None]:
        """Return a copy of every slot."""
        return list(self._slots)

    def __len__(self) -> int:
        """Return the number of occupied frames."""
        return sum(1 for page in self._slots if page is not None)
