"""Text rendering of simulation results.

The simulator returns data; this module turns it into tables.  Nothing
here affects behaviour — every function works purely on a finished
:class:`~pagesim.simulator.SimulationResult`, so the output can always
be rebuilt from the step history.

The main table is transposed: time runs left to right, one column per
request, and each frame gets its own row::

    FIFO Algorithm Simulation
    Number of Frames: 3

    Reference String: 1   2   3   1   2   4
    Frame 1:          1   1   1   1   1   4
    Frame 2:          -   2   2   2   2   2
    Frame 3:          -   -   3   3   3   3
    Hit/Fault:        F   F   F   H   H   F

    Total Page Requests: 6
    Total Page Faults: 4
    Total Page Hits: 2
"""

from collections.abc import Iterable, Sequence

from pagesim.simulator import SimulationResult

_LABEL_WIDTH = 18


def _row(label: str, cells: Iterable[object], width: int) -> str:
    # A cell as wide as the column still gets one space before the next.
    texts = [str(cell) for cell in cells]
    body = "".join(text.ljust(max(width, len(text) + 1)) for text in texts)
    return f"{label:<{_LABEL_WIDTH}}{body}".rstrip()


def format_table(result: SimulationResult, *, width: int = 4, placeholder: str = "-") -> str:
    """Render the frame-by-time table for one run.

    Args:
        result: The finished simulation.
        width: Column width per time step.
        placeholder: Text shown for an empty frame.

    Returns:
        The multi-line table, reference row first and totals last.

    """
    lines = [
        f"{result.policy} Algorithm Simulation",
        f"Number of Frames: {result.frame_count}",
        "",
        _row("Reference String:", result.reference, width),
    ]
    for slot in range(result.frame_count):
        cells = (
            placeholder if step.frames[slot] is None else step.frames[slot]
            for step in result.steps
        )
        lines.append(_row(f"Frame {slot + 1}:", cells, width))
    lines.append(_row("Hit/Fault:", (step.outcome.value for step in result.steps), width))
    lines += [
        "",
        f"Total Page Requests: {result.total_requests}",
        f"Total Page Faults: {result.faults}",
        f"Total Page Hits: {result.hits}",
    ]
    return "\n".join(lines)


def _format_frames(frames: Sequence[object], placeholder: str) -> str:
    return "[" + " ".join(placeholder if page is None else str(page) for page in frames) + "]"


def _build_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    if not rows:
        return "(No data)"
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(len(headers))]

    def _format_row(row: Sequence[str]) -> str:
        return "| " + " | ".join(row[i].ljust(widths[i]) for i in range(len(headers))) + " |"

    separator = "|-" + "-|-".join("-" * w for w in widths) + "-|"
    return "\n".join([_format_row(headers), separator, *(_format_row(r) for r in rows)])


def format_summary(results: Iterable[SimulationResult], *, placeholder: str = "-") -> str:
    """Render a comparison table with one row per run."""
    headers = ("Policy", "Frames", "Requests", "Faults", "Hits", "Hit Rate", "Final Frames")
    rows = [
        (
            r.policy,
            str(r.frame_count),
            str(r.total_requests),
            str(r.faults),
            str(r.hits),
            f"{r.hit_rate:.2f}%",
            _format_frames(r.final_frames, placeholder),
        )
        for r in results
    ]
    return _build_table(headers, rows)


def format_curve(curve: dict[int, int], anomalies: Iterable[int] = ()) -> str:
    """Render a frames → faults listing, flagging Belady anomalies."""
    flagged = set(anomalies)
    lines = []
    for frames in sorted(curve):
        marker = "  <- more faults than with fewer frames" if frames in flagged else ""
        lines.append(f"{frames:>3} frames: {curve[frames]:>3} faults{marker}")
    return "\n".join(lines) if lines else "(No data)"
