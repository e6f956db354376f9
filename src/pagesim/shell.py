"""The shell — command interpreter for the simulator.

The shell reads a command string, parses it into a command name and
arguments, dispatches to the appropriate handler, and returns a string
result.

Design choices:
    - **Returns strings, not prints.**  This keeps the shell fully
      testable and separates concerns (the caller decides how to
      display output).
    - **Command dispatch via a dict.**  Adding a new command means
      writing a method and adding one dict entry.
    - **Input errors become messages.**  A bad frame count or page
      number is reported as ``Error: ...``; the session carries on.
"""

from collections.abc import Callable
from typing import TypeAlias

from pagesim.config import SimulationConfig, parse_frames, parse_policy, parse_reference
from pagesim.logging import Logger, LogLevel
from pagesim.report import format_curve, format_summary, format_table
from pagesim.simulator import (
    SimulationInputError,
    SimulationResult,
    belady_anomalies,
    fault_curve,
    simulate,
    simulate_all,
)

# Type alias for a command handler: takes a list of args, returns output.
_Handler: TypeAlias = Callable[[list[str]], str]

# Minimum args for ``<command> <frames> <pages...>``.
_MIN_RUN_ARGS = 2
_MIN_CURVE_ARGS = 3
_SET_ARGS = 2

_USAGE: dict[str, str] = {
    "fifo": "fifo <frames> <pages...>",
    "lru": "lru <frames> <pages...>",
    "run": "run <pages...>",
    "compare": "compare <frames> <pages...>",
    "curve": "curve <policy> <max_frames> <pages...>",
    "set": "set <policy|frames|width|placeholder> <value>",
}


class Shell:
    """Command interpreter holding one session's settings and log."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(self, *, config: SimulationConfig | None = None) -> None:
        """Create a shell.

        Args:
            config: Session defaults (falls back to ``SimulationConfig()``).

        """
        self._config = config if config is not None else SimulationConfig()
        self._logger = Logger()
        self._history: list[str] = []

        # Command dispatch table — maps command names to handler methods.
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "fifo": self._cmd_fifo,
            "lru": self._cmd_lru,
            "run": self._cmd_run,
            "compare": self._cmd_compare,
            "curve": self._cmd_curve,
            "set": self._cmd_set,
            "show": self._cmd_show,
            "log": self._cmd_log,
            "history": self._cmd_history,
            "exit": self._cmd_exit,
        }

    @property
    def config(self) -> SimulationConfig:
        """Return the current session settings."""
        return self._config

    @property
    def logger(self) -> Logger:
        """Return the session log."""
        return self._logger

    @property
    def command_names(self) -> list[str]:
        """Return all command names, sorted."""
        return sorted(self._commands)

    def execute(self, command: str) -> str:
        """Parse and execute a shell command.

        Args:
            command: The raw command string (e.g. "lru 3 1 2 3 1 2 4").

        Returns:
            The command output as a string, or an error message.

        """
        stripped = command.strip()
        if not stripped:
            return ""
        self._history.append(stripped)

        parts = stripped.split()
        name = parts[0].lower()
        args = parts[1:]

        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"

        try:
            return handler(args)
        except SimulationInputError as exc:
            self._logger.log(LogLevel.WARNING, str(exc), source="shell")
            return f"Error: {exc}"

    # -- Helpers -----------------------------------------------------------

    def _usage(self, name: str) -> str:
        return f"Usage: {_USAGE[name]}"

    def _table(self, result: SimulationResult) -> str:
        return format_table(
            result, width=self._config.width, placeholder=self._config.placeholder
        )

    def _simulate(self, policy: str, args: list[str], name: str) -> str:
        if len(args) < _MIN_RUN_ARGS:
            return self._usage(name)
        frames = parse_frames(args[0])
        reference = parse_reference(" ".join(args[1:]))
        result = simulate(reference, frames, policy=policy, logger=self._logger)
        return self._table(result)

    # -- Command handlers ------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        lines = ["Available commands: " + ", ".join(self.command_names)]
        lines += [f"  {usage}" for usage in _USAGE.values()]
        return "\n".join(lines)

    def _cmd_fifo(self, args: list[str]) -> str:
        """Run FIFO replacement and print the table."""
        return self._simulate("fifo", args, "fifo")

    def _cmd_lru(self, args: list[str]) -> str:
        """Run LRU replacement and print the table."""
        return self._simulate("lru", args, "lru")

    def _cmd_run(self, args: list[str]) -> str:
        """Run the configured policy with the configured frame count."""
        if not args:
            return self._usage("run")
        reference = parse_reference(" ".join(args))
        result = simulate(
            reference, self._config.frames, policy=self._config.policy, logger=self._logger
        )
        return self._table(result)

    def _cmd_compare(self, args: list[str]) -> str:
        """Run every policy on the same input and compare them."""
        if len(args) < _MIN_RUN_ARGS:
            return self._usage("compare")
        frames = parse_frames(args[0])
        reference = parse_reference(" ".join(args[1:]))
        results = simulate_all(reference, frames, logger=self._logger)

        lines = [format_summary(results.values(), placeholder=self._config.placeholder), ""]
        for result in results.values():
            resident = ", ".join(str(p) for p in sorted(result.resident_pages, key=str))
            evicted = ", ".join(str(p) for p in result.evictions) or "none"
            lines.append(f"{result.policy}: resident {{{resident}}}, evicted {evicted}")

        differing = [
            i
            for i, steps in enumerate(zip(*(r.steps for r in results.values()), strict=True))
            if len({step.evicted for step in steps}) > 1
        ]
        if differing:
            positions = ", ".join(str(i + 1) for i in differing)
            lines.append(f"Policies chose different victims at step(s): {positions}")
        else:
            lines.append("Policies made identical eviction choices.")
        return "\n".join(lines)

    def _cmd_curve(self, args: list[str]) -> str:
        """Show faults per frame count, flagging Belady's anomaly."""
        if len(args) < _MIN_CURVE_ARGS:
            return self._usage("curve")
        policy = parse_policy(args[0])
        max_frames = parse_frames(args[1])
        reference = parse_reference(" ".join(args[2:]))
        curve = fault_curve(reference, max_frames, policy=policy)
        anomalies = belady_anomalies(curve)
        header = f"{policy.upper()} faults by frame count:"
        return header + "\n" + format_curve(curve, anomalies)

    def _cmd_set(self, args: list[str]) -> str:
        """Change one session setting."""
        if len(args) != _SET_ARGS:
            return self._usage("set")
        key, value = args
        self._config = self._config.with_value(key.lower(), value)
        return f"{key.lower()} = {getattr(self._config, key.lower())}"

    def _cmd_show(self, _args: list[str]) -> str:
        """Display the session settings."""
        return "\n".join(f"{key} = {value}" for key, value in self._config.items())

    def _cmd_log(self, args: list[str]) -> str:
        """Show log entries (``log clear`` empties the log)."""
        if args and args[0] == "clear":
            self._logger.clear()
            return "Log cleared."
        entries = self._logger.entries
        return "\n".join(str(e) for e in entries) if entries else "No log entries."

    def _cmd_history(self, _args: list[str]) -> str:
        """Show previously executed commands."""
        return "\n".join(f"{i:>4}  {cmd}" for i, cmd in enumerate(self._history, start=1))

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the REPL to stop."""
        return self.EXIT_SENTINEL
