"""Simulation event log.

Every run can record what happened at each step: which page faulted,
which frame it landed in, which page was evicted to make room, and
which accesses hit.  The log is an in-memory audit trail that the
shell's ``log`` command replays and the web UI keeps per app.

What gets logged, and at which level:

- **DEBUG**: a hit.  Hits change nothing in the frames (LRU only
  reorders its recency list), so they are the noisiest, least
  interesting events.
- **INFO**: a fault, e.g. ``fault on page 4 -> frame 1 (evicted page 1)``,
  plus one summary line per run with the request, fault, and hit counts.
- **WARNING**: input a front end rejected (bad frame count, unknown
  policy, malformed page number).
- **ERROR**: a simulation refused before it started.

Entries carry the **step**, the zero-based index of the request in the
reference string, so a log line can be matched to a column of the
rendered table.  ``source`` is the lowercase policy name (``fifo``,
``lru``) for step events, or ``simulator``, ``shell``, ``web`` otherwise.

Design choices:
    - **IntEnum for levels** so ``filter(min_level=LogLevel.INFO)`` hides
      hits and keeps only faults and problems.
    - **Frozen dataclass for entries**: log records should be immutable.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The policy or front end that generated the event.
        step: Zero-based index of the request being processed, if any.

    """

    level: LogLevel
    message: str
    source: str
    step: int | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source#step: message``."""
        where = self.source if self.step is None else f"{self.source}#{self.step}"
        return f"[{self.level.name}] {where}: {self.message}"


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        step: int | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Policy or front end that generated the event.
            step: Index of the request the event belongs to.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, step=step))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of recorded entries."""
        return len(self._entries)
