"""Error hierarchy for the simulator.

Every failure the simulator can report derives from ``SimulationError``
so callers (the CLI, the web front-end) can catch one type and turn it
into an exit status or an HTTP error.  None of them is recoverable
mid-run: the first one raised ends the simulation.
"""


class SimulationError(Exception):
    """Base class for every simulator failure."""


class ConfigurationError(SimulationError):
    """Raise when the simulation is configured with unusable values.

    Examples: an unknown policy name, zero frames, an unreadable config file.
    """


class PageOutOfRangeError(SimulationError):
    """Raise when a trace references a page outside the address space."""


class TraceError(SimulationError):
    """Raise when a trace file cannot be opened or read."""
