"""pagesim — a single-level page table replacement simulator.

Replays a trace of page references against a fixed number of frames
and counts page faults under an LRU or LFU replacement policy::

    from pagesim import SimulationConfig, run_trace

    result = run_trace(SimulationConfig(num_frames=2, policy="LRU"), [1, 2, 3, 1])
    result.faults  # 4
"""

from pagesim.config import SimulationConfig, load_config
from pagesim.errors import (
    ConfigurationError,
    PageOutOfRangeError,
    SimulationError,
    TraceError,
)
from pagesim.simulator import AccessResult, AccessSimulator, SimulationResult, run_trace

__all__ = [
    "AccessResult",
    "AccessSimulator",
    "ConfigurationError",
    "PageOutOfRangeError",
    "SimulationConfig",
    "SimulationError",
    "SimulationResult",
    "TraceError",
    "load_config",
    "run_trace",
]
