from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .algorithms import ALGORITHMS, QUANTUM_ALGORITHMS, run_algorithm
from .errors import SchedulerError
from .report import build_comparison_table, print_report
from .workload_io import load_workload

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scheduling-sim",
        description="Uniprocessor CPU scheduling simulator (FCFS, SJF, SJF-Priority, RR).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging verbosity (default: WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=list(ALGORITHMS),
        help="Algorithm to use.",
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
        help="Draw the Gantt chart with plain ASCII characters.",
    )
    run_parser.add_argument(
        "--max-ticks",
        type=int,
        default=None,
        help="Abort a run that has not finished after this many ticks.",
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


def configure_logging(level: str, console: Console) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _run(args: argparse.Namespace, console: Console) -> None:
    processes = load_workload(Path(args.workload))
    result = run_algorithm(args.algorithm, processes, quantum=args.quantum, max_ticks=args.max_ticks)
    print_report(result, title=args.title, console=console, plain_gantt=args.plain)


def _compare(args: argparse.Namespace, console: Console) -> None:
    workload_path = Path(args.workload)
    processes = load_workload(workload_path)

    results = []
    for alg in args.algorithms:
        q = args.quantum if alg in QUANTUM_ALGORITHMS else None
        results.append(run_algorithm(alg, processes, quantum=q))

    console.print(build_comparison_table(results, title=f"Algorithm comparison: {workload_path}"))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    configure_logging(args.log_level, Console(stderr=True))

    commands = {"run": _run, "compare": _compare}
    try:
        commands[args.command](args, console)
    except (SchedulerError, OSError) as exc:
        logger.error("%s", exc)
        console.print(f"[red]Error: {exc}[/red]")
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
