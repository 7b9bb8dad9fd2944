import argparse
import dataclasses
import json
import sys
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

import numpy as np
from loguru import logger

from lottocore.config import load_settings
from lottocore.constraints import ConstraintEvaluator
from lottocore.generator import GenerationEngine
from lottocore.loader import load_records
from lottocore.models import (
    ConstraintKind,
    DualDrawMode,
    Entry,
    GenerationRequest,
    LotteryType,
)
from lottocore.presets import preset_for
from lottocore.profiles import ProfileCatalog
from lottocore.scorer import OutcomeScorer
from lottocore.statistics import StatisticsAggregator


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Routes loguru output to stderr and, optionally, a rotating file."""
    logger.remove()
    logger.add(sys.stderr, format="{time} {level} {message}", level=level)
    if log_file:
        logger.add(log_file, rotation="10 MB", level=level)


def to_jsonable(obj: Any) -> Any:
    """Convert engine values (dataclasses, enums, numpy scalars) to JSON types."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, dict):
        return {str(to_jsonable(k)): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        items = sorted(obj) if isinstance(obj, (set, frozenset)) else obj
        return [to_jsonable(item) for item in items]
    return obj


def _int_list(value: str) -> List[int]:
    if not value:
        return []
    try:
        return [int(x) for x in value.replace(" ", "").split(",") if x]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected comma separated integers, got {value!r}")


def _constraint_list(value: str) -> List[ConstraintKind]:
    try:
        return [ConstraintKind(x.strip()) for x in value.split(",") if x.strip()]
    except ValueError:
        choices = ", ".join(k.value for k in ConstraintKind)
        raise argparse.ArgumentTypeError(f"Unknown constraint in {value!r}; choose from {choices}")


def _print_json(payload: Any) -> None:
    print(json.dumps(to_jsonable(payload), indent=2, ensure_ascii=False))


def _latest(records):
    return max(records, key=lambda r: r.sequence_id) if records else None


def profiles_command(args, catalog: ProfileCatalog, settings) -> int:
    """Handles the 'profiles' command."""
    _print_json(list(catalog))
    return 0


def generate_command(args, catalog: ProfileCatalog, settings) -> int:
    """Handles the 'generate' command."""
    profile = catalog.get(LotteryType(args.type))
    logger.info(f"Received 'generate' command for {args.count} {profile.name} entries")

    records = load_records(args.records, profile.type) if args.records else []
    max_attempts = settings.max_attempts if args.max_attempts is None else args.max_attempts
    overrides = dict(
        fixed_numbers=tuple(args.fixed),
        fixed_companion_value=args.companion,
        max_attempts=max_attempts,
    )

    preset = preset_for(profile) if args.preset else None
    if preset is not None:
        request = GenerationRequest.from_preset(preset, quantity=args.count, **overrides)
    else:
        if args.preset:
            logger.warning(f"No default preset for {profile.name}; using explicit constraints")
        request = GenerationRequest(
            quantity=args.count,
            active_constraints=tuple(args.constraints),
            **overrides,
        )

    engine = GenerationEngine(ConstraintEvaluator(settings.constraint_defaults()))
    result = engine.generate(profile, request, _latest(records), rng=args.seed)
    _print_json(result)
    return 0


def check_command(args, catalog: ProfileCatalog, settings) -> int:
    """Handles the 'check' command."""
    profile = catalog.get(LotteryType(args.type))
    records = load_records(args.records, profile.type)
    if not records:
        logger.warning("No historical records to check against")
        return 1

    entry = Entry(
        id="cli",
        numbers=tuple(args.numbers),
        created_at=datetime.now(),
        lottery_type=profile.type,
        companion_value=args.companion,
    )
    if not profile.is_valid_numbers(entry.numbers):
        raise ValueError(f"{list(entry.numbers)} is not a valid {profile.name} entry")

    if args.sequence_id is not None:
        matches = [r for r in records if r.sequence_id == args.sequence_id]
        if not matches:
            raise ValueError(f"No record with sequence id {args.sequence_id}")
        record = matches[0]
    else:
        record = _latest(records)

    scorer = OutcomeScorer()
    aggregator = StatisticsAggregator(scorer)
    _print_json({
        "sequence_id": record.sequence_id,
        "verdict": scorer.score(entry, record, profile, DualDrawMode(args.mode)),
        "history": aggregator.historical_hit_distribution(entry, records, profile),
        "insight": aggregator.analyze_entry(entry.numbers, record),
    })
    return 0


def stats_command(args, catalog: ProfileCatalog, settings) -> int:
    """Handles the 'stats' command."""
    profile = catalog.get(LotteryType(args.type))
    records = load_records(args.records, profile.type)
    if args.last is not None:
        if args.last < 0:
            raise ValueError(f"--last must not be negative, got {args.last}")
        records = sorted(records, key=lambda r: r.sequence_id)[max(len(records) - args.last, 0):]

    aggregator = StatisticsAggregator()
    _print_json({
        "records": len(records),
        "numbers": aggregator.number_stats(records, profile),
        "distribution": aggregator.distribution_stats(records, profile),
    })
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="lottocore - constrained entry generation and draw statistics"
    )
    parser.add_argument("--config", default="config/config.ini", help="Path to config.ini")
    subparsers = parser.add_subparsers(dest="command", required=True)
    type_choices = [t.value for t in LotteryType]

    # --- Profiles Command ---
    parser_profiles = subparsers.add_parser("profiles", help="List the built-in game profiles.")
    parser_profiles.set_defaults(func=profiles_command)

    # --- Generate Command ---
    parser_generate = subparsers.add_parser("generate", help="Generate entries under constraints.")
    parser_generate.add_argument("--type", required=True, choices=type_choices)
    parser_generate.add_argument("--count", type=int, default=1, help="Number of entries to generate.")
    parser_generate.add_argument("--constraints", type=_constraint_list, default=[],
                                 help="Comma separated constraint names, applied in order.")
    parser_generate.add_argument("--preset", action="store_true",
                                 help="Use the profile's default constraint preset.")
    parser_generate.add_argument("--fixed", type=_int_list, default=[],
                                 help="Comma separated numbers every entry must contain.")
    parser_generate.add_argument("--companion", type=int, help="Fixed companion value.")
    parser_generate.add_argument("--seed", type=int, help="Seed for reproducible output.")
    parser_generate.add_argument("--max-attempts", type=int, help="Attempt budget.")
    parser_generate.add_argument("--records", help="JSON/CSV records; the latest is the previous draw.")
    parser_generate.set_defaults(func=generate_command)

    # --- Check Command ---
    parser_check = subparsers.add_parser("check", help="Score an entry against past draws.")
    parser_check.add_argument("--type", required=True, choices=type_choices)
    parser_check.add_argument("--numbers", type=_int_list, required=True)
    parser_check.add_argument("--companion", type=int)
    parser_check.add_argument("--records", required=True)
    parser_check.add_argument("--sequence-id", type=int, help="Record to score against (default: latest).")
    parser_check.add_argument("--mode", default=DualDrawMode.BEST.value,
                              choices=[m.value for m in DualDrawMode])
    parser_check.set_defaults(func=check_command)

    # --- Stats Command ---
    parser_stats = subparsers.add_parser("stats", help="Frequency, recency and distribution statistics.")
    parser_stats.add_argument("--type", required=True, choices=type_choices)
    parser_stats.add_argument("--records", required=True)
    parser_stats.add_argument("--last", type=int, help="Only use the most recent N records.")
    parser_stats.set_defaults(func=stats_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the lottocore CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(args.config)
    configure_logging(settings.log_level, settings.log_file)
    catalog = ProfileCatalog()

    try:
        return args.func(args, catalog, settings)
    except ValueError as e:
        logger.error(f"{args.command} failed: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
