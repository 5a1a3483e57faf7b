"""Punish windows and frame-advantage arithmetic.

Buckets are inclusive startup ranges, fastest first::

    10f  [9, 10]   (also absorbs sub-9 punishers; they are rare enough to be a bonus)
    12f  [11, 12]
    13f  [13, 13]
    14f  [14, 14]
    15f+ [15, inf)

Buckets are contiguous and disjoint. A move whose startup is not numeric, or
not positive, lands in no bucket. Empty buckets are never emitted.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from framecoach.contracts.frame_data import Move
from framecoach.contracts.matchup import (
    ClassifiedMoveSet,
    FrameAdvantageEntry,
    PunishCandidate,
    PunishWindow,
)
from framecoach.core.frames.parser import numeric_value, parse_frame_value, parse_startup

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_CANDIDATE_LIMIT = 3


@dataclass(frozen=True, slots=True)
class PunishBucket:
    label: str
    low: int
    high: int | None = None
    absorbs_faster: bool = False

    def contains(self, startup: int) -> bool:
        if startup <= 0:
            return False
        if startup < self.low:
            return self.absorbs_faster
        return self.high is None or startup <= self.high


PUNISH_BUCKETS: tuple[PunishBucket, ...] = (
    PunishBucket("10f", 9, 10, absorbs_faster=True),
    PunishBucket("12f", 11, 12),
    PunishBucket("13f", 13, 13),
    PunishBucket("14f", 14, 14),
    PunishBucket("15f+", 15, None),
)


def bucket_for_startup(startup: int) -> PunishBucket | None:
    for bucket in PUNISH_BUCKETS:
        if bucket.contains(startup):
            return bucket
    return None


def frame_advantage(opponent_move: Move, punish_move: Move) -> int | None:
    """``abs(on_block(opponent)) - startup(punisher)``; None unless both are numeric."""
    block = numeric_value(parse_frame_value(opponent_move.on_block))
    startup = numeric_value(parse_startup(punish_move.startup))
    if block is None or startup is None:
        return None
    return abs(block) - startup


class PunishWindowBuilder:
    def __init__(self, *, candidate_limit: int = DEFAULT_WINDOW_CANDIDATE_LIMIT) -> None:
        if candidate_limit < 1:
            raise ValueError("candidate_limit must be positive")
        self.candidate_limit = candidate_limit

    def build_windows(
        self, punishable: ClassifiedMoveSet, punish_moves: Sequence[Move]
    ) -> tuple[PunishWindow, ...]:
        """Bucket ``punish_moves`` by startup; at most ``candidate_limit`` per bucket."""
        parsed: list[tuple[int, Move, int]] = []
        for index, move in enumerate(punish_moves):
            startup = numeric_value(parse_startup(move.startup))
            if startup is not None and startup > 0:
                parsed.append((index, move, startup))

        windows: list[PunishWindow] = []
        for bucket in PUNISH_BUCKETS:
            candidates = [
                PunishCandidate(index=index, move=move, startup=startup)
                for index, move, startup in parsed
                if bucket.contains(startup)
            ][: self.candidate_limit]
            if not candidates:
                continue
            windows.append(
                PunishWindow(
                    label=bucket.label,
                    min_startup=bucket.low,
                    max_startup=bucket.high,
                    candidates=tuple(candidates),
                    situations=self._situations(punishable, candidates),
                )
            )

        logger.debug(
            f"Built {len(windows)} punish windows from {len(parsed)} timed moves "
            f"against {punishable.size} punishable moves"
        )
        return tuple(windows)

    @staticmethod
    def _situations(
        punishable: ClassifiedMoveSet, candidates: Sequence[PunishCandidate]
    ) -> tuple[str, ...]:
        # Opponent moves the bucket's fastest candidate is guaranteed to punish.
        fastest = min(candidate.startup for candidate in candidates)
        lines = []
        for entry in punishable.moves:
            block = numeric_value(parse_frame_value(entry.move.on_block))
            if block is not None and abs(block) >= fastest:
                lines.append(f"{entry.move.command} ({entry.move.on_block.strip()} on block)")
        return tuple(lines)

    def frame_advantages(
        self, punishable: ClassifiedMoveSet, windows: Sequence[PunishWindow]
    ) -> tuple[FrameAdvantageEntry, ...]:
        """One entry per (punishable move, window candidate) pairing, in rank order."""
        entries = []
        for target in punishable.moves:
            for window in windows:
                for candidate in window.candidates:
                    entries.append(
                        FrameAdvantageEntry(
                            opponent_index=target.index,
                            opponent_move=target.move,
                            punish_index=candidate.index,
                            punish_move=candidate.move,
                            window_label=window.label,
                            advantage=frame_advantage(target.move, candidate.move),
                        )
                    )
        return tuple(entries)
