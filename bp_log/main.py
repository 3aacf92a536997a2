#!/usr/bin/env python3
"""Command line interface for BP Log.

Usage:
    # Save a single reading
    python -m bp_log.main add 128 82 71

    # Save a session of readings, averaged
    python -m bp_log.main session 128/82/71 124/80/70 122/79/69

    # Show merged history, insights and chart series
    python -m bp_log.main history --limit 20
    python -m bp_log.main insights
    python -m bp_log.main chart --range 5d
"""

from __future__ import annotations

import argparse
import copy
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

import yaml

from bp_log.averaging import Average
from bp_log.chart import RANGES, windowed_series
from bp_log.clock import Clock, FixedClock, SystemClock
from bp_log.errors import BPLogError
from bp_log.history import load_history
from bp_log.insights import Insights, compute_insights
from bp_log.labels import LabelProvider
from bp_log.sessions import SessionAggregator, SessionMeta
from bp_log.store import SqliteStore

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_CONFIG = {
    "storage": {
        "database_path": "./data/bp_log.db",
    },
    "history": {
        "session_limit": 100,
        "reading_limit": 200,
    },
    "ui": {
        "language": "gu",
        "pin": None,
    },
    "logging": {
        "level": "INFO",
        "file": None,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
}


def load_config(config_path: str | None = None) -> dict:
    """Load configuration from file or use defaults.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path and Path(config_path).exists():
        with open(config_path) as f:
            user_config = yaml.safe_load(f)
            if user_config and isinstance(user_config, dict):
                # Deep merge user config into defaults
                for section, values in user_config.items():
                    section_config = config.get(section)
                    if (
                        section_config is not None
                        and isinstance(section_config, dict)
                        and isinstance(values, dict)
                    ):
                        section_config.update(values)
                    else:
                        config[section] = values

    return config


def setup_logging(config: dict) -> None:
    """Setup logging based on configuration.

    Args:
        config: Configuration dictionary
    """
    log_config = config.get("logging", {})
    level = getattr(logging, log_config.get("level", "INFO").upper())
    format_str = log_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    log_file = log_config.get("file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=format_str, handlers=handlers)


def parse_triple_arg(value: str) -> dict[str, str]:
    """Parse a ``SYS/DIA/PULSE`` command line value."""
    parts = value.split("/")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"Expected SYS/DIA/PULSE, got '{value}'")
    return dict(zip(("systolic", "diastolic", "pulse"), parts))


def parse_override_arg(value: str) -> Average:
    triple = parse_triple_arg(value)
    try:
        return Average(**{k: int(v) for k, v in triple.items()})
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Override must be integers, got '{value}'") from e


def describe_insights(insights: Insights, labels: LabelProvider) -> list[str]:
    """Render insights as display lines."""
    lines = []
    category = insights.display_category
    if category is not None:
        day = "insights.today" if insights.today_category is not None else "insights.yesterday"
        lines.append(f"{labels.t(day)}: {labels.category_label(category)}")
    if insights.trend is not None:
        lines.append(labels.t(f"trend.{insights.trend}", delta=abs(insights.trend_delta or 0)))
    if insights.streak > 0:
        lines.append(labels.format_streak(insights.streak))
    if insights.time_pattern is not None:
        lines.append(labels.t(f"pattern.{insights.time_pattern}"))

    week = insights.week
    if week.count_7d:
        lines.append(
            f"{labels.t('insights.week')}: {week.systolic}/{week.diastolic} mmHg, "
            f"{week.pulse} bpm"
        )
        lines.append(labels.t("insights.based_on", n=week.count_7d))
    return lines


class BPLogApp:
    """Wires the store, clock and label provider from configuration."""

    def __init__(self, config: dict, clock: Clock | None = None):
        self.config = config
        self.clock = clock or SystemClock()
        self.store = SqliteStore(
            config.get("storage", {}).get("database_path", "./data/bp_log.db")
        )
        self.aggregator = SessionAggregator(self.store)
        self.labels = LabelProvider(config.get("ui", {}).get("language", "gu"))

    def history(self) -> list:
        history_config = self.config.get("history", {})
        return load_history(
            self.store,
            session_limit=history_config.get("session_limit", 100),
            reading_limit=history_config.get("reading_limit", 200),
        )


def cmd_add(args: argparse.Namespace, app: BPLogApp) -> int:
    taken_at = args.at or app.clock.now()
    reading = app.aggregator.save_reading(
        {"systolic": args.systolic, "diastolic": args.diastolic, "pulse": args.pulse},
        taken_at=taken_at,
        photo_ref=args.photo,
    )
    print(f"Saved reading {reading.id}: {reading} ({app.labels.category_label(reading.category)})")
    return 0


def cmd_session(args: argparse.Namespace, app: BPLogApp) -> int:
    meta = SessionMeta(
        timestamp=args.at or app.clock.now(),
        photo_ref=args.photo,
        override=args.override,
    )
    session = app.aggregator.save_session(meta, args.readings)
    print(f"Saved session {session.id}: {session} ({app.labels.category_label(session.category)})")
    return 0


def cmd_history(args: argparse.Namespace, app: BPLogApp) -> int:
    entries = app.history()[: args.limit]
    if args.json:
        print(json.dumps([e.to_dict() for e in entries], indent=2))
        return 0

    if not entries:
        print(app.labels.t("logs.empty"))
        return 0

    for entry in entries:
        suffix = ""
        if entry.is_session:
            suffix = f" [{entry.record.reading_count} {app.labels.t('session.reading_count')}]"
        print(
            f"{entry.timestamp:%Y-%m-%d %H:%M} | "
            f"{entry.systolic}/{entry.diastolic} mmHg | {entry.pulse} bpm | "
            f"{app.labels.category_label(entry.category)}{suffix}"
        )
    return 0


def cmd_insights(args: argparse.Namespace, app: BPLogApp) -> int:
    insights = compute_insights(app.history(), app.clock.now())
    if insights is None:
        print(app.labels.t("logs.empty"))
        return 0

    if args.json:
        print(json.dumps(insights.to_dict(), indent=2))
    else:
        for line in describe_insights(insights, app.labels):
            print(line)
    return 0


def cmd_chart(args: argparse.Namespace, app: BPLogApp) -> int:
    points = windowed_series(app.history(), RANGES[args.range], app.clock.now())
    for p in points:
        print(f"{p.timestamp:%Y-%m-%d %H:%M}\t{p.systolic}\t{p.diastolic}\t{p.pulse}")
    return 0


def cmd_delete(args: argparse.Namespace, app: BPLogApp) -> int:
    if args.kind == "session":
        app.store.delete_session(args.id)
    else:
        app.store.delete_reading(args.id)
    return 0


COMMANDS = {
    "add": cmd_add,
    "session": cmd_session,
    "history": cmd_history,
    "insights": cmd_insights,
    "chart": cmd_chart,
    "delete": cmd_delete,
}


def add_now_argument(parser: argparse.ArgumentParser) -> None:
    """Accept --now after the subcommand without overriding a global --now."""
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=argparse.SUPPRESS,
        help="Use this ISO timestamp as the current time",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Personal blood pressure log",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default="config/config.yaml",
        help="Path to config file (default: config/config.yaml)",
    )
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        help="Use this ISO timestamp as the current time",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Add command
    add_parser = subparsers.add_parser("add", help="Save a single reading")
    add_parser.add_argument("systolic", help="Systolic pressure (mmHg)")
    add_parser.add_argument("diastolic", help="Diastolic pressure (mmHg)")
    add_parser.add_argument("pulse", help="Pulse (bpm)")
    add_parser.add_argument("--at", type=datetime.fromisoformat, help="Reading time (ISO)")
    add_parser.add_argument("--photo", help="Photo reference")

    # Session command
    session_parser = subparsers.add_parser("session", help="Save an averaged session")
    session_parser.add_argument(
        "readings",
        nargs="+",
        type=parse_triple_arg,
        metavar="SYS/DIA/PULSE",
        help="Readings taken in the session",
    )
    session_parser.add_argument("--at", type=datetime.fromisoformat, help="Session time (ISO)")
    session_parser.add_argument("--photo", help="Photo reference")
    session_parser.add_argument(
        "--override",
        type=parse_override_arg,
        metavar="SYS/DIA/PULSE",
        help="Use this average instead of the computed one",
    )

    # History command
    history_parser = subparsers.add_parser("history", help="List merged history")
    history_parser.add_argument("--limit", "-n", type=int, default=50)
    history_parser.add_argument("--json", action="store_true", help="Print JSON")

    # Insights command
    insights_parser = subparsers.add_parser("insights", help="Show today's insights")
    insights_parser.add_argument("--json", action="store_true", help="Print JSON")
    add_now_argument(insights_parser)

    # Chart command
    chart_parser = subparsers.add_parser("chart", help="Print chart series for a window")
    chart_parser.add_argument("--range", "-r", choices=list(RANGES), default="today")
    add_now_argument(chart_parser)

    # Delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a session or reading")
    delete_parser.add_argument("kind", choices=["session", "reading"])
    delete_parser.add_argument("id", type=int)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Load config
    config = load_config(args.config)

    # Setup logging
    if args.debug:
        config["logging"]["level"] = "DEBUG"
    setup_logging(config)

    clock: Clock = FixedClock(args.now) if args.now else SystemClock()

    try:
        app = BPLogApp(config, clock=clock)
        sys.exit(COMMANDS[args.command](args, app))

    except BPLogError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        if args.debug:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
