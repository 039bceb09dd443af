"""Print ranked coaching recommendations for a lead stored as JSON."""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from starz.config import settings
from starz.services.coaching.engine import generate_recommendations
from starz.services.coaching.errors import CoachingError
from starz.services.coaching.signals import load_signal_config, signal_config_from_settings

logger = logging.getLogger("scripts.coach_lead")

ACTIONS = ("calling", "emailing", "scheduling", "qualifying", "closing")


def _parse_now(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid ISO 8601 timestamp: {value}") from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank coaching tips for a single lead.")
    parser.add_argument("--lead", type=Path, required=True, help="Path to the lead JSON object.")
    parser.add_argument("--action", choices=ACTIONS, default=None, help="What the rep is doing right now.")
    parser.add_argument(
        "--now",
        type=_parse_now,
        default=None,
        help="Evaluation time (ISO 8601). Defaults to the current UTC time.",
    )
    parser.add_argument(
        "--signals",
        type=Path,
        default=None,
        help="Signal-table YAML override (default: derived from settings).",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Drop tips at or below this confidence (default: COACHING_CONFIDENCE_THRESHOLD).",
    )
    parser.add_argument("--json", action="store_true", help="Emit the recommendations as JSON.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    args = parse_args(argv)
    now = args.now or datetime.now(timezone.utc)
    try:
        payload = json.loads(args.lead.read_text(encoding="utf-8"))
        config = load_signal_config(args.signals) if args.signals else signal_config_from_settings(settings)
        threshold = settings.coaching_confidence_threshold if args.threshold is None else args.threshold
        recommendations = generate_recommendations(
            payload,
            {"current_action": args.action},
            now,
            config=config,
            threshold=threshold,
        )
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Unable to read lead file %s: %s", args.lead, exc)
        return 1
    except CoachingError as exc:
        logger.error("%s (code=%s)", exc, exc.code)
        return 1

    if args.json:
        print(json.dumps([tip.model_dump(mode="json") for tip in recommendations], indent=2))
        return 0
    if not recommendations:
        print("No coaching tips for this lead.")
        return 0
    for position, tip in enumerate(recommendations, start=1):
        print(f"{position}. [{tip.priority.upper()} {tip.confidence}%] {tip.title} ({tip.id})")
        print(f"   {tip.message}")
        for item in tip.action_items:
            print(f"   - {item}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
