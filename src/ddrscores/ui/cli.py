# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from ddrscores.app import lookup_bpms, update_scores
from ddrscores.config import ConfigurationError, MissingConfigurationError, configure_logging
from ddrscores.config.roster import get_roster_from_environment, parse_roster
from ddrscores.domain.model import SongId, SongIdParseError
from ddrscores.domain.ports import FetchError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from ddrscores.domain.model import PlayerSeed
    from ddrscores.domain.update_pipeline import UpdateResult

_NO_PLAYERS = "No players given; pass --player or set DDRSCORES_PLAYERS"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Aggregate DDR scores from Sanbai and Skill Attack",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    update = subparsers.add_parser("update", help="Fetch catalogs and scores for the roster")
    update.add_argument(
        "--player",
        action="append",
        default=[],
        metavar="NAME:SANBAI:DDRCODE",
        help=(
            "Player to update; either account may be left empty. Repeatable. "
            "Defaults to DDRSCORES_PLAYERS"
        ),
    )

    bpm = subparsers.add_parser("bpm", help="Look up song BPMs on Sanbai")
    bpm.add_argument("song_ids", nargs="+", metavar="SONG_ID", help="32-character Sanbai song id")

    return parser.parse_args(list(argv))


def _resolve_roster(entries: Sequence[str]) -> list[PlayerSeed]:
    if entries:
        seeds = parse_roster(entries)
    else:
        try:
            seeds = get_roster_from_environment()
        except MissingConfigurationError as exc:
            raise ConfigurationError(_NO_PLAYERS) from exc
    if not seeds:
        raise ConfigurationError(_NO_PLAYERS)
    return seeds


def _print_summary(result: UpdateResult) -> None:
    database = result.database
    print(f"{len(database.songs)} songs ({result.new_songs} new), {result.new_scores} new scores")
    for player in database.players:
        print(
            f"  {player.name}: {player.played_song_count()} songs, "
            f"{player.played_chart_count()} charts"
        )
    if not result.secondary_catalog_available:
        print("Skill Attack was unavailable; only Sanbai data was used")
    for failure in result.failed_players:
        print(f"  failed: {failure.player} ({failure.provider}): {failure.message}")


def main(argv: Sequence[str] | None = None) -> None:
    """Run the requested subcommand."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else None)
    if parsed_args.command == "bpm":
        _run_bpm(parsed_args.song_ids)
    else:
        _run_update(parsed_args.player)


def _run_update(entries: Sequence[str]) -> None:
    try:
        seeds = _resolve_roster(entries)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    try:
        result = update_scores(seeds)
    except FetchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    _print_summary(result)


def _run_bpm(raw_ids: Sequence[str]) -> None:
    try:
        song_ids = [SongId.parse(raw) for raw in raw_ids]
    except SongIdParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    try:
        bpms = lookup_bpms(song_ids)
    except FetchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    for song_id, bpm in bpms.items():
        print(f"{song_id}: {bpm if bpm is not None else 'unknown'}")


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
