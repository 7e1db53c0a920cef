"""chronoseries-lite CLI entry point.

Usage: uv run chronoseries-lite [command]
"""
import argparse
import logging
import sys
from datetime import timedelta


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "simulate",
        help="Record a generated gappy workload and report storage costs.",
    )
    p.add_argument(
        "--ticks", type=int, default=10_000,
        help="Total ticks to record (default: 10000)",
    )
    p.add_argument(
        "--series", type=int, default=8,
        help="Number of series sampled per tick (default: 8)",
    )
    p.add_argument(
        "--tick-ms", type=int, default=1000,
        help="Milliseconds between ticks (default: 1000)",
    )
    p.add_argument(
        "--gap-rate", type=float, default=0.02,
        help="Per-tick probability a series goes silent (default: 0.02)",
    )
    p.add_argument(
        "--mean-gap", type=float, default=20.0,
        help="Mean gap length in ticks (default: 20)",
    )
    p.add_argument(
        "--checkpoint-every", type=int, default=60,
        help="Checkpoint the time axis every N ticks (default: 60)",
    )
    p.add_argument(
        "--retention-s", type=float, default=None,
        help="Keep roughly this many seconds of history (default: keep all)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible runs (default: 42)",
    )


def _run_simulate(args: argparse.Namespace) -> None:
    from chronoseries_lite.profiling.harness import run_simulation
    from chronoseries_lite.profiling.report import format_report

    retention = None
    if args.retention_s is not None:
        retention = timedelta(seconds=args.retention_s)

    try:
        result = run_simulation(
            total_ticks=args.ticks,
            num_series=args.series,
            tick_ms=args.tick_ms,
            gap_rate=args.gap_rate,
            mean_gap_ticks=args.mean_gap,
            checkpoint_every=args.checkpoint_every,
            retention=retention,
            seed=args.seed,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)

    print(format_report(result))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="chronoseries-lite",
        description="Gap-tolerant time-series storage -- pure Python, in memory.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log debug output (prunes, retention passes) to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_simulate_parser(subparsers)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "simulate":
        _run_simulate(args)
