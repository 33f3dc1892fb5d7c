"""Command-line entry point.

Usage::

    pagesim <frames> <trace_file> <policy> [-v] [--config FILE]

The CLI is the thin I/O wrapper around the simulator: it parses the
arguments, reads the trace, runs it, and prints the fault total.  All
failures surface as a message on stderr and a non-zero exit status:

    - 2 for malformed arguments (argparse's usage error convention).
    - 1 for an unknown policy, a bad frame count, an unreadable trace
      or config file, or a page outside the address space.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pagesim.config import SimulationConfig, load_config
from pagesim.errors import SimulationError
from pagesim.logging import Logger
from pagesim.simulator import AccessSimulator
from pagesim.trace import read_trace

EXIT_OK = 0
EXIT_FAILURE = 1

VERBOSE_BANNER = "..:: Output mode - Verbose ::.."


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``pagesim`` command."""
    parser = argparse.ArgumentParser(
        prog="pagesim",
        description="Simulate a single-level page table under a memory trace.",
    )
    parser.add_argument("frames", type=int, help="number of frames to simulate in the page table")
    parser.add_argument("trace", type=Path, help="name of file containing the memory trace input")
    parser.add_argument("policy", help="the page replacement policy, either LRU or LFU")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="enable verbose output mode",
    )
    parser.add_argument("--config", type=Path, help="JSON file with default settings")
    return parser


def _resolve_config(args: argparse.Namespace) -> SimulationConfig:
    if args.config is not None:
        base = load_config(args.config)
    else:
        base = SimulationConfig(num_frames=args.frames, policy=args.policy)
    return base.with_overrides(
        num_frames=args.frames,
        policy=args.policy,
        verbose=args.verbose,
    ).validate()


def main(argv: list[str] | None = None) -> int:
    """Run the simulator from command-line arguments and return the exit status."""
    args = build_parser().parse_args(argv)
    logger = Logger()
    verbose = False
    try:
        config = _resolve_config(args)
        verbose = config.verbose
        if verbose:
            print(VERBOSE_BANNER)  # noqa: T201
        pages = read_trace(args.trace)
        simulator = AccessSimulator.from_config(config, logger=logger)
        result = simulator.run(pages)
    except SimulationError as e:
        if verbose:
            _print_log(logger)
        print(f"Error: {e}", file=sys.stderr)  # noqa: T201
        return EXIT_FAILURE

    if verbose:
        _print_log(logger)
    print(result.summary())  # noqa: T201
    return EXIT_OK


def _print_log(logger: Logger) -> None:
    for entry in logger.entries:
        print(entry)  # noqa: T201


def run() -> None:
    """Console-script wrapper around ``main``."""
    sys.exit(main())


if __name__ == "__main__":
    run()
