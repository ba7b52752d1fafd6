"""Command line entry points for the fish finder."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, List, Mapping

from fish import FishFinder, FishSizeError
from project_config import fish_settings
from puzzle import GridFormatError, load_grid
from solver import TRACE_LEVELS, DeltaValidationError, EventLog, StepRunner, solve_with_fish
from solver.trace import SolveTraceEntry


def _parse_sizes(value: str) -> List[int]:
    try:
        sizes = [int(part) for part in value.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid size list: {value!r}") from exc
    if not sizes:
        raise argparse.ArgumentTypeError("at least one size is required")
    return sizes


def cmd_find(args: argparse.Namespace) -> int:
    grid = load_grid(args.grid)
    finder = FishFinder(args.size)
    step = finder.find_next_step(grid)
    if step is None:
        payload: Any = {"found": False, "message": finder.not_applicable_message()}
    else:
        payload = {"found": True, **step.to_payload()}
    print(json.dumps(payload, indent=2, sort_keys=True))
    return 0


def cmd_solve(args: argparse.Namespace) -> int:
    settings = fish_settings()
    sizes = args.sizes or list(settings.sizes)
    trace_level = args.trace_level or settings.trace_level
    log_dir = args.log_dir or settings.log_dir

    grid = load_grid(args.grid)
    runner = StepRunner(trace_level=trace_level)

    on_step = None
    if log_dir:
        event_log = EventLog(log_dir, max_bytes=settings.log_max_bytes)

        def log_step(entry: SolveTraceEntry, metrics: Mapping[str, Any]) -> None:
            event_log.append({"event": "fish.step", **entry.to_payload(), "axis": metrics.get("axis")})

        on_step = log_step

    outcome = solve_with_fish(grid, sizes, runner=runner, max_steps=args.max_steps, on_step=on_step)
    summary = {
        "steps": len(outcome.trace.entries),
        "candidates_before": grid.candidate_count(),
        "candidates_after": outcome.grid.candidate_count(),
        "grid": outcome.grid.to_candidate_csv(),
        "trace": json.loads(outcome.trace.to_json()),
    }
    if trace_level != "none":
        summary["runner_trace"] = [
            {"step_kind": e.step_kind, "step_name": e.step_name, "meta": dict(e.meta)}
            for e in runner.trace_recorder.snapshot()
        ]
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find basic fish in a sudoku candidate grid")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    sub = parser.add_subparsers(dest="command", required=True)

    find = sub.add_parser("find", help="Report the next fish of one size")
    find.add_argument("grid", help="Grid file (.json document, candidate CSV or givens)")
    find.add_argument("--size", type=int, default=2, help="Fish size (2 = X-wing)")
    find.set_defaults(func=cmd_find)

    solve = sub.add_parser("solve", help="Apply fish eliminations until none is left")
    solve.add_argument("grid", help="Grid file (.json document, candidate CSV or givens)")
    solve.add_argument(
        "--sizes",
        type=_parse_sizes,
        default=None,
        help="Comma separated fish sizes (default from config.toml)",
    )
    solve.add_argument("--trace-level", choices=TRACE_LEVELS, default=None)
    solve.add_argument("--max-steps", type=int, default=None)
    solve.add_argument("--log-dir", default=None, help="Append step events as JSONL under this directory")
    solve.set_defaults(func=cmd_solve)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (FishSizeError, GridFormatError, DeltaValidationError, OSError) as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
