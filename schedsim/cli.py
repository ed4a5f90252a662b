from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .algorithms import ALGORITHMS, run_algorithm
from .errors import InvalidInput
from .report import print_comparison, print_result
from .workload_io import load_workload

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, SJF with priority, Round Robin).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity (default: WARNING; INFO shows SJF-priority completions).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        type=str.lower,
        choices=list(ALGORITHMS),
        help="Algorithm to use (fcfs, sjf, sjf-priority, rr).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by the other algorithms).",
    )
    run_parser.add_argument(
        "--title",
        "-t",
        default=None,
        help="Title printed above the report (default: the algorithm name).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart in plain ASCII instead of colors.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        type=str.lower,
        choices=list(ALGORITHMS),
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: all).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=2,
        help="Time quantum used for RR when included (default: 2).",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    err_console = Console(stderr=True)

    try:
        processes = load_workload(Path(args.workload))

        if args.command == "run":
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum, title=args.title)
            print_result(result, plain_gantt=args.plain)
            return 0

        if args.command == "compare":
            results = []
            for alg in args.algorithms:
                q = args.quantum if alg == "rr" else None
                results.append(run_algorithm(alg, processes, quantum=q))
            print_comparison(results)
            return 0
    except (InvalidInput, OSError) as exc:
        logger.debug("Run aborted", exc_info=True)
        err_console.print(f"[red]Error: {escape(str(exc))}[/red]", soft_wrap=True)
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
