"""Replacement policies — who gets evicted when every frame is full.

A policy owns the **eviction order structure** for one simulation run.
It sees every page that is loaded, evicted, or touched, and when the
frames are full it names the victim.  The frame bookkeeping itself
lives in the simulator; policies only answer "who goes next?".

Replacement Policies (Strategy pattern):
    - **FIFO** — evict the page that has been resident longest.  The
      queue is never reordered by hits, which is why FIFO can suffer
      from Belady's anomaly (more frames → more faults for some
      reference strings).
    - **LRU** — evict the page touched longest ago.  Every access, hit
      or fault, moves the page to the most-recently-used end.  Forget
      to reorder on hits and LRU silently degenerates into FIFO.

Both keep their contents exactly equal to the set of resident pages.
"""

from collections import OrderedDict, deque
from collections.abc import Hashable
from typing import Protocol

# ---------------------------------------------------------------------------
# Replacement Policy Protocol (Strategy pattern)
# ---------------------------------------------------------------------------


class ReplacementPolicy(Protocol):
    """Interface for page replacement algorithms.

    Each policy tracks which pages are resident and decides which one
    to evict when space is needed.
    """

    name: str

    def add_page(self, page: Hashable) -> None:
        """Record that a page was loaded into a frame."""
        ...

    def remove_page(self, page: Hashable) -> None:
        """Record that a page was evicted from its frame."""
        ...

    def record_access(self, page: Hashable) -> None:
        """Record that a resident page was accessed (a hit)."""
        ...

    def select_victim(self) -> Hashable:
        """Choose which page to evict.

        Returns:
            The page that should leave memory next.

        Raises:
            IndexError: If no pages are available to evict.

        """
        ...

    def order(self) -> tuple[Hashable, ...]:
        """Return the tracked pages, next victim first."""
        ...

    def __len__(self) -> int:
        """Return the number of tracked pages."""
        ...


# ---------------------------------------------------------------------------
# FIFO Policy
# ---------------------------------------------------------------------------


class FIFOPolicy:
    """First In, First Out — evict the oldest loaded page.

    Uses a deque as the queue.  The left end is always the oldest
    (earliest loaded) page, so both enqueue and dequeue are O(1).
    """

    name = "FIFO"

    def __init__(self) -> None:
        """Create an empty FIFO policy."""
        self._queue: deque[Hashable] = deque()

    def add_page(self, page: Hashable) -> None:
        """Record that a page was loaded (appended to the queue)."""
        self._queue.append(page)

    def remove_page(self, page: Hashable) -> None:
        """Remove a page from the queue."""
        if self._queue and self._queue[0] == page:
            self._queue.popleft()
        else:
            self._queue.remove(page)

    def record_access(self, page: Hashable) -> None:
        """FIFO ignores accesses — order is purely by load time."""

    def select_victim(self) -> Hashable:
        """Return the oldest page (front of the queue).

        Raises:
            IndexError: If no pages are tracked.

        """
        if not self._queue:
            msg = "No pages to evict"
            raise IndexError(msg)
        return self._queue[0]

    def order(self) -> tuple[Hashable, ...]:
        """Return the queue, oldest first."""
        return tuple(self._queue)

    def __len__(self) -> int:
        """Return the number of queued pages."""
        return len(self._queue)


# ---------------------------------------------------------------------------
# LRU Policy
# ---------------------------------------------------------------------------


class LRUPolicy:
    """Least Recently Used — evict the page accessed longest ago.

    Uses an OrderedDict for O(1) move-to-end on access and O(1)
    removal by value.  The first key is always the least recently used.
    """

    name = "LRU"

    def __init__(self) -> None:
        """Create an empty LRU policy."""
        self._order: OrderedDict[Hashable, None] = OrderedDict()

    def add_page(self, page: Hashable) -> None:
        """Record that a page was loaded (most recently used)."""
        self._order[page] = None
        self._order.move_to_end(page)

    def remove_page(self, page: Hashable) -> None:
        """Remove a page from LRU tracking."""
        self._order.pop(page, None)

    def record_access(self, page: Hashable) -> None:
        """Move the page to the most recently used position."""
        if page in self._order:
            self._order.move_to_end(page)

    def select_victim(self) -> Hashable:
        """Return the least recently used page (front of the order).

        Raises:
            IndexError: If no pages are tracked.

        """
        if not self._order:
            msg = "No pages to evict"
            raise IndexError(msg)
        return next(iter(self._order))

    def order(self) -> tuple[Hashable, ...]:
        """Return the recency list, least recently used first."""
        return tuple(self._order)

    def __len__(self) -> int:
        """Return the number of tracked pages."""
        return len(self._order)
