"""Memory model — page table, frame table, and replacement policies.

Re-exports public symbols so callers can write::

    from pagesim.memory import FrameTable, PageTable, policy_for
"""

from pagesim.memory.frames import FrameTable
from pagesim.memory.page_table import MAX_PAGES, PageRecord, PageTable
from pagesim.memory.replacement import (
    POLICIES,
    LFUPolicy,
    LRUPolicy,
    ReplacementPolicy,
    policy_for,
)

__all__ = [
    "MAX_PAGES",
    "POLICIES",
    "FrameTable",
    "LFUPolicy",
    "LRUPolicy",
    "PageRecord",
    "PageTable",
    "ReplacementPolicy",
    "policy_for",
]
