"""Page replacement simulator — FIFO and LRU over a fixed set of frames.

Re-exports public symbols so callers can write::

    from pagesim import simulate_lru, format_table
"""

from pagesim.config import SimulationConfig, parse_frames, parse_reference
from pagesim.logging import LogEntry, Logger, LogLevel
from pagesim.policies import FIFOPolicy, LRUPolicy, ReplacementPolicy
from pagesim.report import format_curve, format_summary, format_table
from pagesim.simulator import (
    POLICIES,
    FrameTable,
    Outcome,
    SimulationInputError,
    SimulationResult,
    StepRecord,
    belady_anomalies,
    fault_curve,
    make_policy,
    simulate,
    simulate_all,
    simulate_fifo,
    simulate_lru,
)

__all__ = [
    "POLICIES",
    "FIFOPolicy",
    "FrameTable",
    "LRUPolicy",
    "LogEntry",
    "LogLevel",
    "Logger",
    "Outcome",
    "ReplacementPolicy",
    "SimulationConfig",
    "SimulationInputError",
    "SimulationResult",
    "StepRecord",
    "belady_anomalies",
    "fault_curve",
    "format_curve",
    "format_summary",
    "format_table",
    "make_policy",
    "parse_frames",
    "parse_reference",
    "simulate",
    "simulate_all",
    "simulate_fifo",
    "simulate_lru",
]
