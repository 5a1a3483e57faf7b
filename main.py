"""
Main entry point: build one matchup context against the live frame-data source.

Usage:
    python main.py "Devil Jin" "Sergei Dragunov"
    python main.py Jin Kazuya --top 10
"""

import argparse
import asyncio
import logging
import sys

from framecoach.adapters.tekkendocs import TekkenDocsAdapter
from framecoach.config.settings import get_settings
from framecoach.contracts.matchup import MatchupContext
from framecoach.core.errors import DataEmpty, FetchError, ResolutionError
from framecoach.core.observability import configure_stdlib_json_logging
from framecoach.core.services import CharacterDataCache, MatchupContextBuilder


def setup_logging() -> None:
    settings = get_settings()
    configure_stdlib_json_logging(level=settings.app_log_level)
    if not settings.app_debug:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)


def print_report(context: MatchupContext, top: int) -> None:
    print(f"\n{context.player_character} ({context.player_character_id}) vs "
          f"{context.opponent_character} ({context.opponent_character_id})")
    print(f"  Player moves: {len(context.player_moves)}")
    print(f"  Opponent moves: {len(context.opponent_moves)}")

    print(f"\nPlayer key moves (top {top}):")
    for rank, entry in enumerate(context.player_key_moves.moves[:top], start=1):
        move = entry.move
        reasons = ", ".join(reason.value for reason in entry.reasons)
        print(f"  {rank}. {move.command} - {move.hit_level}, {move.startup}f, "
              f"{move.on_block} on block [{reasons}]")

    print(f"\nOpponent punishable moves (top {top}):")
    for rank, entry in enumerate(context.opponent_punishable_moves.moves[:top], start=1):
        print(f"  {rank}. {entry.move.command} - {entry.move.on_block} on block")

    print("\nPunish windows:")
    for window in context.punish_windows:
        candidates = ", ".join(f"{c.move.command} (i{c.startup})" for c in window.candidates)
        print(f"  {window.label}: {candidates}")
        for situation in window.situations[:top]:
            print(f"      punishes {situation}")

    print("\nFrame advantage after punish:")
    for entry in context.frame_advantages[:top]:
        print(f"  {entry.opponent_move.command} -> {entry.punish_move.command} "
              f"[{entry.window_label}]: {entry.advantage_label}")


async def run(player: str, opponent: str, top: int) -> int:
    logger = logging.getLogger(__name__)
    settings = get_settings()

    async with TekkenDocsAdapter() as adapter:
        cache = CharacterDataCache(
            adapter.fetch_frame_data,
            ttl_s=settings.frame_data_cache_ttl_seconds,
            fetch_timeout_s=settings.frame_data_fetch_timeout_seconds,
        )
        builder = MatchupContextBuilder(cache)
        try:
            context = await builder.build(player, opponent)
        except ResolutionError as e:
            logger.error(f"Unknown character: {e}")
            return 2
        except DataEmpty as e:
            logger.error(f"No frame data available: {e}")
            return 3
        except FetchError as e:
            logger.error(f"Frame data fetch failed: {e}")
            return 1

    print_report(context, top)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Build a frame-data matchup context")
    parser.add_argument("player", help="Player character display name")
    parser.add_argument("opponent", help="Opponent character display name")
    parser.add_argument("--top", type=int, default=5, help="Rows to print per section")
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(run(args.player, args.opponent, args.top)))


if __name__ == "__main__":
    main()
