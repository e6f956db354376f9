"""Tab completer for the simulator shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which looks at the words
already typed and returns a list of candidate strings.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from pagesim.simulator import POLICIES

if TYPE_CHECKING:
    from pagesim.shell import Shell

# Commands that accept a keyword as their first argument.
_SUBCOMMANDS: dict[str, list[str]] = {
    "curve": sorted(POLICIES),
    "set": ["frames", "placeholder", "policy", "width"],
    "log": ["clear"],
}


class Completer:
    """Context-aware tab completer for the simulator shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance."""
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return the candidates for the word being typed.

        Args:
            text: The partial word under the cursor.
            line: The whole input line so far.

        """
        words = line.split()
        # Still typing the first word (or nothing yet)?
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return [name for name in self._shell.command_names if name.startswith(text)]

        command = words[0].lower()
        typed_args = len(words) - 1 if line.endswith(" ") else len(words) - 2
        if typed_args == 0 and command in _SUBCOMMANDS:
            return [word for word in _SUBCOMMANDS[command] if word.startswith(text)]
        if command == "set" and typed_args == 1 and words[1].lower() == "policy":
            return [name for name in sorted(POLICIES) if name.startswith(text)]
        return []
