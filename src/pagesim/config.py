"""Simulation configuration.

A run is fully described by four values: how many frames to simulate,
which replacement policy to use, how large the page address space is,
and whether to keep a verbose trace.  ``SimulationConfig`` carries them
as an immutable record; ``load_config`` reads the same keys from a JSON
file so a set of runs can share defaults::

    {"frames": 4, "policy": "LRU", "max_pages": 1024, "verbose": false}

Values given on the command line take precedence over the file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from pagesim.errors import ConfigurationError
from pagesim.memory.page_table import MAX_PAGES, MAX_PAGES_LIMIT
from pagesim.memory.replacement import POLICIES

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class SimulationConfig:
    """Parameters of one simulation run."""

    num_frames: int
    policy: str
    max_pages: int = MAX_PAGES
    verbose: bool = False

    def validate(self) -> SimulationConfig:
        """Check every field and return self.

        Raises:
            ConfigurationError: If any value is unusable.

        """
        if self.policy not in POLICIES:
            msg = f"Policy was: {self.policy}, must be either LRU or LFU"
            raise ConfigurationError(msg)
        check_sizes(num_frames=self.num_frames, max_pages=self.max_pages)
        return self

    def with_overrides(self, **overrides: Any) -> SimulationConfig:
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def check_sizes(*, num_frames: int, max_pages: int) -> None:
    """Validate the frame count against the address space.

    A frame beyond the number of pages can never be filled, so
    ``num_frames`` is capped at ``max_pages``; ``max_pages`` itself is
    capped at ``MAX_PAGES_LIMIT``.

    Raises:
        ConfigurationError: If either size is out of bounds.

    """
    if not 1 <= max_pages <= MAX_PAGES_LIMIT:
        msg = f"max_pages must be between 1 and {MAX_PAGES_LIMIT}, got {max_pages}"
        raise ConfigurationError(msg)
    if num_frames < 1:
        msg = f"Number of frames must be a positive integer, got {num_frames}"
        raise ConfigurationError(msg)
    if num_frames > max_pages:
        msg = (
            f"Number of frames ({num_frames}) cannot exceed "
            f"the {max_pages} pages of the address space"
        )
        raise ConfigurationError(msg)


def _typed(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key, default)
    # bool is an int subclass, but JSON true/false is never a count
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        msg = f"{key!r} must be {kind.__name__}, got {value!r}"
        raise ConfigurationError(msg)
    return value


def load_config(path: Path) -> SimulationConfig:
    """Load a configuration from a JSON file.

    Missing keys fall back to defaults; ``frames`` and ``policy`` default
    to 1 and ``"LRU"`` so a file can hold only the values it cares about.
    The ``pagesim`` command always supplies frames and policy as
    positional arguments, which override the file, so on the command
    line only ``max_pages`` and ``verbose`` take effect from it.

    Raises:
        ConfigurationError: If the file cannot be read or parsed, or a
            value has the wrong JSON type.

    """
    try:
        data = json.loads(path.read_text())
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        msg = f"Cannot load config {path}: {e}"
        raise ConfigurationError(msg) from e
    if not isinstance(data, dict):
        msg = f"Cannot load config {path}: expected a JSON object"
        raise ConfigurationError(msg)
    return SimulationConfig(
        num_frames=_typed(data, "frames", int, 1),
        policy=_typed(data, "policy", str, "LRU"),
        max_pages=_typed(data, "max_pages", int, MAX_PAGES),
        verbose=_typed(data, "verbose", bool, False),
    )
