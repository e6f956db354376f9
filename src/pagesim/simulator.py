"""Page replacement simulator — one control loop, pluggable policies.

A simulation replays a **reference string** (the ordered page requests
of a process) against a fixed number of physical **frames**.  Each
request is either a **hit** (the page is already resident) or a
**fault** (it must be loaded, evicting a victim if every frame is
taken).

The loop is the same for every algorithm; only the victim choice
differs, so it is written once here and parameterised by a
:class:`~pagesim.policies.ReplacementPolicy`:

    1. Hit   → tell the policy (LRU reorders, FIFO ignores it).
    2. Fault, free frame available → load into the lowest empty slot.
    3. Fault, frames full → ask the policy for a victim, overwrite the
       victim's slot with the new page.

After every request a :class:`StepRecord` snapshots the frames, so the
full history can be rendered later without re-running anything.

Every run builds its own frame table and policy instance and returns
an immutable :class:`SimulationResult` — there is no shared state, so
independent runs never interfere and identical inputs always give
identical results.
"""

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

from pagesim.logging import Logger, LogLevel
from pagesim.policies import FIFOPolicy, LRUPolicy, ReplacementPolicy

PolicyFactory: TypeAlias = Callable[[], ReplacementPolicy]


class SimulationInputError(ValueError):
    """Raise when a simulation is requested with invalid arguments."""


# Registry of the available policies, keyed by lowercase name.
POLICIES: dict[str, PolicyFactory] = {
    "fifo": FIFOPolicy,
    "lru": LRUPolicy,
}


def make_policy(name: str) -> ReplacementPolicy:
    """Create a fresh policy instance by name (case-insensitive).

    Raises:
        SimulationInputError: If no policy has that name.

    """
    factory = POLICIES.get(name.strip().lower())
    if factory is None:
        choices = ", ".join(sorted(POLICIES))
        msg = f"Unknown policy '{name}' (choose from: {choices})"
        raise SimulationInputError(msg)
    return factory()


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class Outcome(StrEnum):
    """Whether a request found its page resident."""

    HIT = "H"
    FAULT = "F"


@dataclass(frozen=True)
class StepRecord:
    """The frames after one request, plus what happened.

    Attributes:
        page: The requested page.
        frames: Frame contents after the request (``None`` = empty slot).
        outcome: Hit or fault.
        evicted: The page evicted to make room, if any.

    """

    page: Hashable
    frames: tuple[Hashable | None, ...]
    outcome: Outcome
    evicted: Hashable | None = None


@dataclass(frozen=True)
class SimulationResult:
    """Complete history and counters for one run."""

    policy: str
    frame_count: int
    reference: tuple[Hashable, ...]
    steps: tuple[StepRecord, ...]
    faults: int
    hits: int

    @property
    def total_requests(self) -> int:
        """Return the number of requests processed."""
        return len(self.reference)

    @property
    def outcomes(self) -> tuple[Outcome, ...]:
        """Return the hit/fault tag of every step."""
        return tuple(step.outcome for step in self.steps)

    @property
    def final_frames(self) -> tuple[Hashable | None, ...]:
        """Return the frame contents after the last request."""
        if not self.steps:
            return (None,) * self.frame_count
        return self.steps[-1].frames

    @property
    def resident_pages(self) -> frozenset[Hashable]:
        """Return the pages resident at the end of the run."""
        return frozenset(page for page in self.final_frames if page is not None)

    @property
    def evictions(self) -> tuple[Hashable, ...]:
        """Return the evicted pages in eviction order."""
        return tuple(step.evicted for step in self.steps if step.evicted is not None)

    @property
    def hit_rate(self) -> float:
        """Return hits / requests as a percentage (0.0 for no requests)."""
        return (self.hits / self.total_requests) * 100 if self.total_requests else 0.0


# ---------------------------------------------------------------------------
# Frame table (Frame Set + Residency Index)
# ---------------------------------------------------------------------------


class FrameTable:
    """Fixed-capacity frames with an O(1) residency index.

    The index maps each resident page to its slot and always holds
    exactly the non-empty slots.  Slots are filled lowest-index first
    and never emptied again — an eviction immediately reuses its slot.
    """

    def __init__(self, capacity: int) -> None:
        """Create *capacity* empty frames."""
        self._slots: list[Hashable | None] = [None] * capacity
        self._index: dict[Hashable, int] = {}
        self._free: list[int] = list(range(capacity))

    @property
    def capacity(self) -> int:
        """Return the number of frames."""
        return len(self._slots)

    @property
    def is_full(self) -> bool:
        """Return True when no empty frame remains."""
        return not self._free

    def __contains__(self, page: object) -> bool:
        """Check whether a page is resident."""
        return page in self._index

    def __len__(self) -> int:
        """Return the number of resident pages."""
        return len(self._index)

    def place(self, page: Hashable) -> int:
        """Load *page* into the lowest empty slot and return the slot.

        Raises:
            IndexError: If every frame is occupied.

        """
        if not self._free:
            msg = "No empty frame available"
            raise IndexError(msg)
        slot = self._free.pop(0)
        self._slots[slot] = page
        self._index[page] = slot
        return slot

    def replace(self, victim: Hashable, page: Hashable) -> int:
        """Overwrite the victim's slot with *page* and return the slot.

        Raises:
            KeyError: If the victim is not resident.

        """
        slot = self._index.pop(victim)
        self._slots[slot] = page
        self._index[page] = slot
        return slot

    def snapshot(self) -> tuple[Hashable | None, ...]:
        """Return an immutable copy of the current frame contents."""
        return tuple(self._slots)


# ---------------------------------------------------------------------------
# Simulation loop
# ---------------------------------------------------------------------------


def _validate(reference: Iterable[Hashable] | None, frames: object) -> tuple[Hashable, ...]:
    """Check the caller's arguments and freeze the reference string."""
    if reference is None:
        msg = "A reference string is required"
        raise SimulationInputError(msg)
    if isinstance(frames, bool) or not isinstance(frames, int):
        msg = f"Frame count must be an integer, got {frames!r}"
        raise SimulationInputError(msg)
    if frames < 1:
        msg = f"Frame count must be at least 1, got {frames}"
        raise SimulationInputError(msg)
    pages = tuple(reference)
    if any(page is None for page in pages):
        msg = "Page identifiers must not be None"
        raise SimulationInputError(msg)
    return pages


def _resolve(policy: str | PolicyFactory) -> ReplacementPolicy:
    if isinstance(policy, str):
        return make_policy(policy)
    return policy()


def simulate(
    reference: Iterable[Hashable] | None,
    frames: int,
    *,
    policy: str | PolicyFactory = "fifo",
    logger: Logger | None = None,
) -> SimulationResult:
    """Replay a reference string against *frames* frames.

    Args:
        reference: The ordered page requests.
        frames: Number of physical frames (at least 1).
        policy: A registered policy name or a factory returning a fresh
            policy instance.
        logger: Optional log receiving one entry per request.

    Returns:
        The per-step history and hit/fault counters.

    Raises:
        SimulationInputError: If the frame count is not a positive
            integer, the reference string is missing, or the policy
            name is unknown.

    """
    try:
        pages = _validate(reference, frames)
        order = _resolve(policy)
    except SimulationInputError as exc:
        if logger is not None:
            logger.log(LogLevel.ERROR, str(exc), source="simulator")
        raise

    source = order.name.lower()
    table = FrameTable(frames)
    steps: list[StepRecord] = []
    hits = 0
    faults = 0

    for step, page in enumerate(pages):
        evicted: Hashable | None = None
        if page in table:
            hits += 1
            order.record_access(page)
            outcome = Outcome.HIT
            if logger is not None:
                logger.log(LogLevel.DEBUG, f"hit on page {page}", source=source, step=step)
        else:
            faults += 1
            if table.is_full:
                evicted = order.select_victim()
                order.remove_page(evicted)
                slot = table.replace(evicted, page)
            else:
                slot = table.place(page)
            order.add_page(page)
            outcome = Outcome.FAULT
            if logger is not None:
                detail = f" (evicted page {evicted})" if evicted is not None else ""
                logger.log(
                    LogLevel.INFO,
                    f"fault on page {page} -> frame {slot + 1}{detail}",
                    source=source,
                    step=step,
                )
        steps.append(
            StepRecord(page=page, frames=table.snapshot(), outcome=outcome, evicted=evicted)
        )

    if logger is not None:
        logger.log(
            LogLevel.INFO,
            f"{len(pages)} requests, {faults} faults, {hits} hits with {frames} frames",
            source=source,
        )

    return SimulationResult(
        policy=order.name,
        frame_count=frames,
        reference=pages,
        steps=tuple(steps),
        faults=faults,
        hits=hits,
    )


def simulate_fifo(
    reference: Iterable[Hashable] | None,
    frames: int,
    *,
    logger: Logger | None = None,
) -> SimulationResult:
    """Run the FIFO policy; see :func:`simulate`."""
    return simulate(reference, frames, policy=FIFOPolicy, logger=logger)


def simulate_lru(
    reference: Iterable[Hashable] | None,
    frames: int,
    *,
    logger: Logger | None = None,
) -> SimulationResult:
    """Run the LRU policy; see :func:`simulate`."""
    return simulate(reference, frames, policy=LRUPolicy, logger=logger)


def simulate_all(
    reference: Iterable[Hashable] | None,
    frames: int,
    *,
    logger: Logger | None = None,
) -> dict[str, SimulationResult]:
    """Run every registered policy on the same input, keyed by name."""
    pages = _validate(reference, frames)
    return {
        name: simulate(pages, frames, policy=factory, logger=logger)
        for name, factory in POLICIES.items()
    }


# ---------------------------------------------------------------------------
# Fault curves (Belady's anomaly)
# ---------------------------------------------------------------------------


def fault_curve(
    reference: Iterable[Hashable] | None,
    max_frames: int,
    *,
    policy: str | PolicyFactory = "fifo",
) -> dict[int, int]:
    """Count faults for every frame count from 1 to *max_frames*.

    Returns:
        A mapping of frame count to fault count, in ascending order.

    Raises:
        SimulationInputError: On the same conditions as :func:`simulate`.

    """
    pages = _validate(reference, max_frames)
    return {
        frames: simulate(pages, frames, policy=policy).faults
        for frames in range(1, max_frames + 1)
    }


def belady_anomalies(curve: dict[int, int]) -> list[int]:
    """Return the frame counts that fault more than one frame fewer did.

    LRU is a stack algorithm and never shows the anomaly; FIFO can.
    """
    anomalies: list[int] = []
    previous: int | None = None
    for frames in sorted(curve):
        faults = curve[frames]
        if previous is not None and faults > previous:
            anomalies.append(frames)
        previous = faults
    return anomalies
