"""Simulation settings and input parsing.

The front ends (shell, web UI) accept text — ``"1,2,3 1 2 4"`` for a
reference string, ``"3"`` for a frame count — and share one set of
defaults.  This module turns that text into validated values and keeps
the defaults in a small immutable settings object.

Defaults can be overridden from the process environment::

    PAGESIM_POLICY=lru PAGESIM_FRAMES=4 pagesim

Settings are immutable; ``with_value`` returns an updated copy, so a
shell session can change its own settings without touching anyone
else's.
"""

import dataclasses
import re
from collections.abc import Mapping
from dataclasses import dataclass

from pagesim.simulator import POLICIES, SimulationInputError

_SEPARATORS = re.compile(r"[\s,]+")

# Upper bounds for text input; every frame is materialised in each step snapshot.
MAX_FRAMES = 1024
MAX_WIDTH = 32
_MAX_PAGE_DIGITS = 18

# Environment variable → settings field.
ENV_VARS: dict[str, str] = {
    "PAGESIM_POLICY": "policy",
    "PAGESIM_FRAMES": "frames",
    "PAGESIM_WIDTH": "width",
    "PAGESIM_PLACEHOLDER": "placeholder",
}


def parse_reference(text: str) -> tuple[int, ...]:
    """Parse a comma and/or whitespace separated reference string.

    Args:
        text: e.g. ``"7 0 1 2"`` or ``"7,0,1,2"``.

    Returns:
        The page numbers in order (empty for blank text).

    Raises:
        SimulationInputError: If a token is not a non-negative integer.

    """
    pages: list[int] = []
    for token in _SEPARATORS.split(text.strip()):
        if not token:
            continue
        if not (token.isascii() and token.isdigit()):
            msg = f"Invalid page number '{token}' (expected a non-negative integer)"
            raise SimulationInputError(msg)
        if len(token) > _MAX_PAGE_DIGITS:
            msg = f"Invalid page number '{token}' (at most {_MAX_PAGE_DIGITS} digits)"
            raise SimulationInputError(msg)
        pages.append(int(token))
    return tuple(pages)


def _parse_positive(text: str, what: str, limit: int) -> int:
    stripped = text.strip()
    digits = stripped.lstrip("0")
    if not (stripped.isascii() and stripped.isdigit()) or not digits:
        msg = f"Invalid {what} '{text}' (expected a positive integer)"
        raise SimulationInputError(msg)
    # Compare lengths first; int() refuses very long digit strings.
    if len(digits) > len(str(limit)) or int(digits) > limit:
        msg = f"Invalid {what} '{text}' (at most {limit})"
        raise SimulationInputError(msg)
    return int(digits)


def parse_frames(text: str) -> int:
    """Parse a positive frame count.

    Raises:
        SimulationInputError: If the text is not an integer between 1
            and ``MAX_FRAMES``.

    """
    return _parse_positive(text, "frame count", MAX_FRAMES)


def parse_policy(text: str) -> str:
    """Normalise a policy name, rejecting unknown ones."""
    name = text.strip().lower()
    if name not in POLICIES:
        choices = ", ".join(sorted(POLICIES))
        msg = f"Unknown policy '{text}' (choose from: {choices})"
        raise SimulationInputError(msg)
    return name


@dataclass(frozen=True)
class SimulationConfig:
    """Defaults used when a command does not spell everything out.

    Attributes:
        policy: Registered policy name.
        frames: Frame count.
        width: Column width of the rendered table.
        placeholder: Text shown for an empty frame.

    """

    policy: str = "fifo"
    frames: int = 3
    width: int = 4
    placeholder: str = "-"

    def with_value(self, key: str, text: str) -> "SimulationConfig":
        """Return a copy with one setting changed from text.

        Raises:
            SimulationInputError: If the key is unknown or the value
                is invalid for it.

        """
        match key:
            case "policy":
                value: str | int = parse_policy(text)
            case "frames":
                value = parse_frames(text)
            case "width":
                value = _parse_positive(text, "column width", MAX_WIDTH)
            case "placeholder":
                if not text:
                    msg = "Placeholder must not be empty"
                    raise SimulationInputError(msg)
                value = text
            case _:
                names = ", ".join(f.name for f in dataclasses.fields(self))
                msg = f"Unknown setting '{key}' (choose from: {names})"
                raise SimulationInputError(msg)
        return dataclasses.replace(self, **{key: value})

    def items(self) -> list[tuple[str, str]]:
        """Return all (name, value) pairs as text."""
        return [(f.name, str(getattr(self, f.name))) for f in dataclasses.fields(self)]

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "SimulationConfig":
        """Build settings from ``PAGESIM_*`` variables, ignoring others."""
        config = cls()
        for var, key in ENV_VARS.items():
            if var in environ:
                config = config.with_value(key, environ[var])
        return config

    def resolve_request(self, data: Mapping[str, object]) -> tuple[str, int, tuple[int, ...]]:
        """Resolve a request body into ``(policy, frames, reference)``.

        Missing ``policy`` and ``frames`` fall back to these settings.
        ``reference`` may be a list of non-negative integers or a string
        accepted by :func:`parse_reference`.

        Raises:
            SimulationInputError: If any field is missing or invalid.

        """
        policy = parse_policy(str(data.get("policy", self.policy)))

        frames = data.get("frames", self.frames)
        if isinstance(frames, str):
            frames = parse_frames(frames)
        if isinstance(frames, bool) or not isinstance(frames, int) or frames < 1:
            msg = f"Invalid frame count {frames!r} (expected a positive integer)"
            raise SimulationInputError(msg)
        if frames > MAX_FRAMES:
            msg = f"Invalid frame count {frames} (at most {MAX_FRAMES})"
            raise SimulationInputError(msg)

        raw = data.get("reference")
        if isinstance(raw, str):
            reference = parse_reference(raw)
        elif isinstance(raw, list) and all(
            isinstance(p, int) and not isinstance(p, bool) and p >= 0 for p in raw
        ):
            reference = tuple(raw)
        else:
            msg = "Field 'reference' must be a string or a list of non-negative integers"
            raise SimulationInputError(msg)
        return policy, frames, reference
