"""Command-line interface for trafficsplit."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import jsonschema

from trafficsplit.allocation import AllocationEngine
from trafficsplit.config import ALLOCATION_CONFIG
from trafficsplit.exceptions import TrafficSplitError
from trafficsplit.io import read_demands, read_network, write_allocations
from trafficsplit.lib.overlay import OverlayGraph
from trafficsplit.logging import (
    enable_debug_logging,
    get_logger,
    set_global_log_level,
)
from trafficsplit.scenario import ClosureScenario

logger = get_logger(__name__)


def _allocate(
    graph_path: Path,
    demands_path: Path,
    output_path: Optional[Path],
    closures_path: Optional[Path],
    k: int,
    scale: float,
) -> None:
    """Route every demand in a CSV and write the allocation CSV.

    Args:
        graph_path: Network file.
        demands_path: Origin/destination demand CSV.
        output_path: Allocation CSV to write, or None for stdout.
        closures_path: Optional closure scenario YAML.
        k: Candidate paths per demand.
        scale: Decay constant for path scores.
    """
    logger.info("Loading network: %s", graph_path)
    with graph_path.open("r", encoding="utf-8") as fh:
        network = read_network(fh)
    logger.info("Network loaded: %r", network)

    overlay = OverlayGraph(network)
    if closures_path is not None:
        scenario = ClosureScenario.from_yaml(closures_path.read_text(encoding="utf-8"))
        scenario.apply(overlay)

    engine = AllocationEngine(scale=scale, k=k)

    with demands_path.open("r", encoding="utf-8", newline="") as demand_fh:
        records = engine.route_all(read_demands(demand_fh), overlay)
        if output_path is None:
            write_allocations(sys.stdout, records)
            return

        # Rows are produced lazily; only a complete CSV replaces the target
        output_path.parent.mkdir(parents=True, exist_ok=True)
        partial_path = output_path.with_name(output_path.name + ".partial")
        try:
            with partial_path.open("w", encoding="utf-8", newline="") as out_fh:
                written = write_allocations(out_fh, records)
        except BaseException:
            partial_path.unlink(missing_ok=True)
            raise
        partial_path.replace(output_path)

    logger.info("Wrote %d allocation rows to %s", written, output_path)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``trafficsplit`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="trafficsplit",
        description="Split travel demand across alternative routes under road closures.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{allocate}",
        help="Available commands",
    )

    allocate_parser = subparsers.add_parser(
        "allocate", help="Allocate demand to k shortest routes"
    )
    allocate_parser.add_argument("graph", type=Path, help="Path to network file")
    allocate_parser.add_argument(
        "demands", type=Path, help="Path to origin,destination,count CSV"
    )
    allocate_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Allocation CSV to write (default: stdout)",
    )
    allocate_parser.add_argument(
        "--closures",
        "-c",
        type=Path,
        default=None,
        help="Closure scenario YAML listing removed vertices and edges",
    )
    allocate_parser.add_argument(
        "-k",
        type=int,
        default=ALLOCATION_CONFIG.k,
        help=f"Candidate routes per demand (default: {ALLOCATION_CONFIG.k})",
    )
    allocate_parser.add_argument(
        "--scale",
        type=float,
        default=ALLOCATION_CONFIG.scale,
        help=f"Decay constant per unit of path weight (default: {ALLOCATION_CONFIG.scale})",
    )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        enable_debug_logging()
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "allocate":
        try:
            _allocate(
                graph_path=args.graph,
                demands_path=args.demands,
                output_path=args.output,
                closures_path=args.closures,
                k=args.k,
                scale=args.scale,
            )
        except FileNotFoundError as e:
            logger.error(f"File not found: {e.filename}")
            sys.exit(1)
        except jsonschema.ValidationError as e:
            logger.error(f"Invalid closure scenario: {e.message}")
            sys.exit(1)
        except (TrafficSplitError, ValueError) as e:
            logger.error(f"Allocation failed: {e}")
            sys.exit(1)


if __name__ == "__main__":
    main()
