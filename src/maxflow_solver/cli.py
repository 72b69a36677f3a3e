"""Command line interface: ``maxflow-solve <input-file>``."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence

from .data import SolverOptions
from .exceptions import MaxFlowError, NetworkParseError
from .io import DIMACS_FORMAT, JSON_FORMAT, TEXT_FORMAT
from .reporting import format_report
from .solver import find_max_flow, load_network, save_result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="maxflow-solve",
        description="Compute the maximum flow of a network with the Edmonds-Karp algorithm.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Input format (text): first line is the node count, then one\n"
            "'tail head capacity' edge per line. Source and sink default to\n"
            "node 0 and the last node."
        ),
    )
    parser.add_argument("input", help="Network description file")
    parser.add_argument(
        "--format",
        choices=(TEXT_FORMAT, JSON_FORMAT, DIMACS_FORMAT),
        default=None,
        help="Input format (default: inferred from the file suffix)",
    )
    parser.add_argument("--source", type=int, default=None, help="Source node id")
    parser.add_argument("--sink", type=int, default=None, help="Sink node id")
    parser.add_argument(
        "--summary-only",
        action="store_true",
        help="Skip per-iteration trace lines (recommended for large networks)",
    )
    parser.add_argument(
        "--max-path-display",
        type=int,
        default=10,
        help="Longest path, in edges, printed node by node (default: 10)",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Stop after this many augmenting iterations",
    )
    parser.add_argument("--output", default=None, help="Write the result as JSON to this file")
    parser.add_argument(
        "--show-flows", action="store_true", help="List the flow on every used edge"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        options = SolverOptions(
            detailed_trace=not args.summary_only,
            max_path_display=args.max_path_display,
            max_iterations=args.max_iterations,
        )

        print(f"Parsing network from file: {args.input}")
        instance = load_network(args.input, fmt=args.format)
        source = instance.source if args.source is None else args.source
        sink = instance.sink if args.sink is None else args.sink

        print("\nRunning Edmonds-Karp algorithm...")
        start = time.perf_counter()
        result = find_max_flow(instance.network, source, sink, options=options)
        elapsed = time.perf_counter() - start

        print()
        print(
            format_report(
                result,
                network=instance.network if args.show_flows else None,
                elapsed=elapsed,
            )
        )

        if args.output:
            save_result(args.output, result)
            print(f"\nResult written to {args.output}")

        if not instance.network.is_flow_conserved(source, sink):
            print("WARNING: Flow conservation property is violated!", file=sys.stderr)
    except OSError as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        return 1
    except NetworkParseError as e:
        print(f"Error in input file format: {e}", file=sys.stderr)
        return 1
    except MaxFlowError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
