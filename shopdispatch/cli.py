"""Command-line entry point.

Reads a simulation in the line protocol from a file or stdin, serves
every client and prints the results:

    shopdispatch --policy shops < simulation.txt
    shopdispatch --policy taxis --workers 4 simulation.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .config import AppConfig, ObservabilityConfig, get_config
from .container import Container
from .domain.errors import MalformedInputError
from .domain.models import Policy
from .ports.cache import CachePort
from .services import SimulationRunner


def configure_logging(config: ObservabilityConfig) -> None:
    """Send log records to stderr at the configured level."""
    logging.basicConfig(
        level=config.level.upper(),
        format=config.format,
        stream=sys.stderr,
    )


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shopdispatch",
        description="Match clients to their nearest shops or taxis over a weighted graph.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Simulation file in the line protocol ('-' or omitted reads stdin).",
    )
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in Policy],
        default=None,
        help="Matching policy (default from SDS_DISPATCH_POLICY, else 'shops').",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Threads serving requests; output order is unchanged.",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Recompute every shortest-path run instead of reusing it.",
    )
    return parser


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    dispatch_update = {}
    if args.policy is not None:
        dispatch_update["policy"] = args.policy
    if args.workers is not None:
        dispatch_update["max_workers"] = args.workers

    update = {}
    if dispatch_update:
        update["dispatch"] = config.dispatch.model_copy(update=dispatch_update)
    if args.no_cache:
        update["engine"] = config.engine.model_copy(update={"cache_enabled": False})

    return config.model_copy(update=update) if update else config


def _read_lines(source: str, encoding: str) -> List[str]:
    if source == "-":
        return sys.stdin.read().splitlines()
    with Path(source).open(encoding=encoding) as f:
        return f.read().splitlines()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = _apply_overrides(get_config(), args)
    configure_logging(config.observability)
    logger = logging.getLogger(__name__)

    policy = Policy(config.dispatch.policy)
    try:
        lines = _read_lines(args.input, config.input.encoding)
    except OSError as e:
        print(f"Cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    container = Container.create_default(config)
    runner: SimulationRunner = container.resolve(SimulationRunner)
    try:
        runner.run_lines(lines, policy)
    except MalformedInputError as e:
        logger.debug("Aborting on malformed input", extra={"line_number": e.line_number})
        print(f"Incorrect input at line {e.line_number}: {e}", file=sys.stderr)
        return 1

    logger.debug(
        "Run cache filled",
        extra={"entries": container.resolve(CachePort).size()},
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
