"""Interactive REPL (Read-Eval-Print Loop) for the simulator.

The REPL is the thin I/O wrapper around the shell:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the command to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until the shell returns the exit sentinel.

Given command-line arguments, ``run`` executes them as a single command
instead and exits, so ``pagesim lru 3 1 2 3 1 2 4`` works from any
terminal.

The helper functions (``build_prompt``, ``format_banner``) are pure
and testable.  The ``run()`` function is the I/O entrypoint.
"""

import os
import readline
import sys

from pagesim.completer import Completer
from pagesim.config import SimulationConfig
from pagesim.shell import Shell
from pagesim.simulator import SimulationInputError

_BANNER_WIDTH = 38


def format_banner(config: SimulationConfig) -> str:
    """Format the start-up banner showing the session defaults."""
    border = "=" * _BANNER_WIDTH
    header = f"\n  {border}\n        Page Replacement Simulator\n  {border}\n\n"
    body = f"  policy={config.policy} frames={config.frames}\n"
    footer = "\nType 'help' for commands, 'exit' to quit.\n"
    return header + body + footer


def build_prompt(shell: Shell) -> str:
    """Build the prompt string, e.g. ``pagesim[fifo/3] $ ``."""
    config = shell.config
    return f"pagesim[{config.policy}/{config.frames}] $ "


def run(argv: list[str] | None = None) -> int:
    """Run one command from *argv*, or the interactive REPL.

    Returns:
        The process exit status (1 when the settings or the single
        command are invalid).

    """
    args = sys.argv[1:] if argv is None else argv
    try:
        config = SimulationConfig.from_env(os.environ)
    except SimulationInputError as exc:
        print(f"Error: {exc}", file=sys.stderr)  # noqa: T201
        return 1
    shell = Shell(config=config)

    if args:
        result = shell.execute(" ".join(args))
        if result.startswith(("Error:", "Unknown command:", "Usage:")):
            print(result, file=sys.stderr)  # noqa: T201
            return 1
        if result and result != Shell.EXIT_SENTINEL:
            print(result)  # noqa: T201
        return 0

    # Wire up tab completion via readline.
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner(config))  # noqa: T201

    try:
        while True:
            try:
                command = input(build_prompt(shell))
            except EOFError:
                # Ctrl+D — graceful exit
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C — graceful exit
        print("\nInterrupted.")  # noqa: T201

    return 0


def main() -> None:
    """Console entry point for ``pagesim``."""
    sys.exit(run())
