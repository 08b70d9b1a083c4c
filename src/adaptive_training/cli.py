#!/usr/bin/env python3
"""
Adaptive Training CLI.

Classify requests, analyze wearable snapshots and adjust workout plans
from JSON files.

Usage:
    adaptive-training classify "Necesito reducir la carga"
    adaptive-training analyze snapshot.json
    adaptive-training adjust plan.json "Quiero más volumen"
    adaptive-training actions snapshot.json --context context.json
    adaptive-training interpret snapshot.json --context context.json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from .config import configure_logging
from .exceptions import AdaptiveTrainingError
from .models import load_context, load_plan, load_snapshot
from .services import TrainingAdjustmentService


# ANSI color codes
class Colors:
    RED = "\033[91m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


def get_readiness_color(readiness: str) -> str:
    """Get color for training readiness."""
    colors = {
        "ready": Colors.GREEN,
        "caution": Colors.YELLOW,
        "rest": Colors.RED,
    }
    return colors.get(readiness, Colors.RESET)


def read_json(path: str) -> Any:
    with open(Path(path), "r", encoding="utf-8") as f:
        return json.load(f)


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _load_optional_context(path: Optional[str]):
    return load_context(read_json(path) if path else None)


def cmd_classify(service: TrainingAdjustmentService, args) -> None:
    """Classify a free-text request."""
    print_json(service.parser.classify(args.text).to_dict())


def cmd_analyze(service: TrainingAdjustmentService, args) -> None:
    """Analyze a wearable snapshot."""
    snapshot = load_snapshot(read_json(args.snapshot))
    insights = service.insight_engine.analyze(snapshot)
    if args.json:
        print_json(insights.to_dict())
        return

    readiness = insights.training_readiness.value
    color = get_readiness_color(readiness)
    print(f"{Colors.BOLD}Recovery score:{Colors.RESET} {insights.recovery_score}")
    print(f"{Colors.BOLD}Readiness:{Colors.RESET} {color}{readiness.upper()}{Colors.RESET}")
    print(f"  HRV:      {insights.hrv_status.value}")
    print(f"  Sleep:    {insights.sleep_quality.value}")
    print(f"  Stress:   {insights.stress_level.value}")
    print(f"  Recovery: {insights.recovery_status.value}")
    print(f"  Energy:   {insights.energy_level.value}")


def cmd_adjust(service: TrainingAdjustmentService, args) -> None:
    """Apply a free-text request to a plan."""
    plan = load_plan(read_json(args.plan))
    outcome = service.handle_request(args.text, plan)
    print_json(outcome.to_dict())


def cmd_actions(service: TrainingAdjustmentService, args) -> None:
    """Translate a snapshot into concrete actions."""
    snapshot = load_snapshot(read_json(args.snapshot))
    context = _load_optional_context(args.context)
    print_json(service.translate_to_actions(args.user, snapshot, context).to_dict())


def cmd_interpret(service: TrainingAdjustmentService, args) -> None:
    """Full wearable interpretation."""
    snapshot = load_snapshot(read_json(args.snapshot))
    context = _load_optional_context(args.context)
    print_json(service.interpret_wearable_data(args.user, snapshot, context).to_dict())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adaptive-training",
        description="Adaptive training adjustments from requests and wearable data",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_classify = subparsers.add_parser("classify", help="Classify a modification request")
    p_classify.add_argument("text", help="Request text")
    p_classify.set_defaults(func=cmd_classify)

    p_analyze = subparsers.add_parser("analyze", help="Analyze a wearable snapshot")
    p_analyze.add_argument("snapshot", help="Snapshot JSON file")
    p_analyze.add_argument("--json", action="store_true", help="Print raw JSON")
    p_analyze.set_defaults(func=cmd_analyze)

    p_adjust = subparsers.add_parser("adjust", help="Apply a request to a plan")
    p_adjust.add_argument("plan", help="Workout plan JSON file")
    p_adjust.add_argument("text", help="Request text")
    p_adjust.set_defaults(func=cmd_adjust)

    for name, func, help_text in (
        ("actions", cmd_actions, "Translate a snapshot into actions"),
        ("interpret", cmd_interpret, "Interpret a snapshot against a context"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("snapshot", help="Snapshot JSON file")
        sub.add_argument("--context", default=None, help="Training context JSON file")
        sub.add_argument("--user", default="local", help="User id")
        sub.set_defaults(func=func)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    service = TrainingAdjustmentService()
    try:
        args.func(service, args)
    except AdaptiveTrainingError as e:
        print(json.dumps(e.to_dict(), ensure_ascii=False, default=str), file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
