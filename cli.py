#!/usr/bin/env python3
"""
CLI for playing statistics.

Commands:
- summary: Record games from PGN files and print the end-of-game summary
- report: Record games from PGN files and show per-variant statistics
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import yaml

from game.finished_game import PgnFinishedGame, read_pgn_games
from game.models import StatsConfig, Variant
from stats_service import PlayingStatsService
from utils import names_match

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/stats.yaml"


def load_config(config_path: str) -> StatsConfig:
    """
    Load the "stats" section of a YAML config file.

    A missing file means defaults.

    Raises:
        ValueError: If the file is not a mapping
        pydantic.ValidationError: If a setting has an invalid value
    """
    path = Path(config_path)
    if not path.exists():
        logger.info(f"Config file not found, using defaults: {path}")
        return StatsConfig()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    section = data.get("stats") or {}
    if not isinstance(section, dict):
        raise ValueError(f"'stats' section in {path} must be a mapping")

    return StatsConfig(**section)


def user_color(game: PgnFinishedGame, user: str) -> Optional[bool]:
    """True if the user was white, False if black, None if not in the game."""
    if names_match(game.header("White"), user):
        return True
    if names_match(game.header("Black"), user):
        return False
    return None


def iter_user_games(paths: List[str], user: str) -> Iterator[Tuple[PgnFinishedGame, bool]]:
    """
    Yield (game, is_user_white) for every game the user played.

    Raises:
        OSError: If a PGN file cannot be read
    """
    for path in paths:
        count = 0
        for game in read_pgn_games(path):
            is_user_white = user_color(game, user)
            if is_user_white is None:
                logger.info(
                    f"Skipping {game.header('White')} vs {game.header('Black')}: "
                    f"{user} did not play"
                )
                continue
            count += 1
            yield game, is_user_white
        logger.info(f"Read {count} games for {user} from {path}")


def show_summaries(args, config: StatsConfig) -> int:
    """Record each game and print its summary."""
    service = PlayingStatsService(config=config)
    connector = args.connector or config.connector

    try:
        for game, is_user_white in iter_user_games(args.pgn, args.user):
            service.record_game_end(connector, game, is_user_white)
            summary = service.build_summary(connector, game, is_user_white)
            if summary is None:
                continue
            print(f"{game.header('White')} vs {game.header('Black')} ({game.header('Result')})")
            print(summary)
            print()
    except OSError as e:
        print(f"Error: cannot read PGN: {e}", file=sys.stderr)
        return 1

    return 0


def format_report(service: PlayingStatsService, connector: str) -> str:
    """Format the per-variant records as an ASCII table."""
    records = service.variant_records(connector)
    if not records:
        return "No recorded games."

    lines = [
        "=" * 64,
        f"{'Variant':<20} {'Games':<6} {'W-L-D':<12} {'Score%':<8} {'Perf':<6} {'Opps':<5}",
        "=" * 64,
    ]

    for variant_value in sorted(records):
        record = records[variant_value]
        performance = service.performance_rating(connector, Variant(variant_value))
        perf_str = str(performance) if performance is not None else "-"
        wld = f"{record['wins']}-{record['losses']}-{record['draws']}"
        lines.append(
            f"{variant_value:<20} {record['games']:<6} {wld:<12} "
            f"{record['score_rate'] * 100:>6.1f}% {perf_str:<6} {record['num_opponents']:<5}"
        )

    lines.append("=" * 64)
    return "\n".join(lines)


def show_report(args, config: StatsConfig) -> int:
    """Record all games, then print the report."""
    service = PlayingStatsService(config=config)
    connector = args.connector or config.connector

    try:
        for game, is_user_white in iter_user_games(args.pgn, args.user):
            service.record_game_end(connector, game, is_user_white)
    except OSError as e:
        print(f"Error: cannot read PGN: {e}", file=sys.stderr)
        return 1

    print(format_report(service, connector))

    if args.opponent:
        vs_stats = service.vs_stats(connector, args.opponent)
        if vs_stats.games_played > 0:
            print(f"Series({args.opponent}): {vs_stats.total_score}/{vs_stats.games_played}")
        else:
            print(f"No games against {args.opponent}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Playing statistics")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("pgn", nargs="+", help="PGN file(s) to read")
    common.add_argument(
        "--user", "-u",
        required=True,
        help="Your player name as it appears in the White/Black headers",
    )
    common.add_argument(
        "--connector",
        help="Connector id to record under (default from config)",
    )
    common.add_argument(
        "--config", "-c",
        default=DEFAULT_CONFIG_PATH,
        help="Path to stats config file",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )

    subparsers.add_parser(
        "summary", parents=[common], help="Print the end-of-game summary for each game"
    )
    report_parser = subparsers.add_parser(
        "report", parents=[common], help="Show per-variant statistics"
    )
    report_parser.add_argument(
        "--opponent",
        help="Also show the series against this opponent",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "summary":
        return show_summaries(args, config)
    elif args.command == "report":
        return show_report(args, config)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
