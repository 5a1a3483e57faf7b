"""Matchup Context Builder - orchestration only.

1. Resolve both display names to character ids.
2. Fetch both move lists through the cache, concurrently.
3. Key moves for the player, punishable moves for the opponent.
4. Punish windows from the opponent's punishable set against the player's
   FULL move list (fast punishers need not be key moves).
5. Assemble the immutable ``MatchupContext``.

All-or-nothing: if either side fails the whole build fails. The other
side's fetch is never cancelled, so it still lands in the cache.
"""

from __future__ import annotations

import asyncio
import logging
import uuid

from framecoach.config.settings import get_settings
from framecoach.contracts.matchup import MatchupContext
from framecoach.core.data.characters import resolve_character_id
from framecoach.core.frames.classifier import MoveClassifier
from framecoach.core.frames.punish import PunishWindowBuilder
from framecoach.core.observability import (
    clear_correlation_id,
    set_correlation_id,
    trace_performance,
)
from framecoach.core.services.character_data_cache import CharacterDataCache

logger = logging.getLogger(__name__)


class MatchupContextBuilder:
    def __init__(
        self,
        cache: CharacterDataCache,
        *,
        classifier: MoveClassifier | None = None,
        window_builder: PunishWindowBuilder | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            cache: Shared character data cache (usually one per process)
            classifier: Defaults to limits from settings
            window_builder: Defaults to the per-window limit from settings
        """
        settings = get_settings()
        self.cache = cache
        self.classifier = classifier or MoveClassifier(
            key_move_limit=settings.key_move_limit,
            punishable_move_limit=settings.punishable_move_limit,
        )
        self.window_builder = window_builder or PunishWindowBuilder(
            candidate_limit=settings.punish_window_candidate_limit
        )

    @trace_performance
    async def build(
        self,
        player_name: str,
        opponent_name: str,
        *,
        timeout: float | None = None,
    ) -> MatchupContext:
        """Build the matchup context for ``player_name`` vs ``opponent_name``.

        Raises:
            ResolutionError: a name cannot form a character id
            FetchError: either side's data could not be fetched
            DataEmpty: either side's source data has no moves
        """
        player_id = resolve_character_id(player_name)
        opponent_id = resolve_character_id(opponent_name)

        set_correlation_id(uuid.uuid4().hex)
        try:
            logger.info(f"Building matchup context {player_id} vs {opponent_id}")
            player_moves, opponent_moves = await asyncio.gather(
                self.cache.get(player_id, timeout=timeout),
                self.cache.get(opponent_id, timeout=timeout),
            )

            key_moves = self.classifier.key_moves(player_moves)
            punishable = self.classifier.punishable_moves(opponent_moves)
            windows = self.window_builder.build_windows(punishable, player_moves)
            advantages = self.window_builder.frame_advantages(punishable, windows)

            logger.info(
                f"Matchup {player_id} vs {opponent_id}: {key_moves.size} key moves, "
                f"{punishable.size} punishable, {len(windows)} punish windows"
            )
            return MatchupContext(
                player_character=player_name,
                opponent_character=opponent_name,
                player_character_id=player_id,
                opponent_character_id=opponent_id,
                player_moves=player_moves,
                opponent_moves=opponent_moves,
                player_key_moves=key_moves,
                opponent_punishable_moves=punishable,
                punish_windows=windows,
                frame_advantages=advantages,
            )
        finally:
            clear_correlation_id()
