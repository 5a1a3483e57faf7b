"""Move classification: key moves for the player, punishable moves for the opponent.

Pure functions of the input list. Ordering is a total order: every sort key
ends with the original list position, so identical input always produces the
identical ranked output.
"""

from __future__ import annotations

from collections.abc import Sequence

from framecoach.contracts.frame_data import Move
from framecoach.contracts.matchup import (
    ClassificationReason,
    ClassifiedMove,
    ClassifiedMoveSet,
    ClassifiedSetKind,
)
from framecoach.core.frames.parser import (
    Numeric,
    Outcome,
    numeric_value,
    parse_frame_value,
    parse_startup,
)
from framecoach.core.frames.vocabulary import OutcomeTag, match_property

FAST_POKE_MAX_STARTUP = 12
PLUS_ON_BLOCK_MIN = 1
PUNISHABLE_MAX_ON_BLOCK = -10

DEFAULT_KEY_MOVE_LIMIT = 20
DEFAULT_PUNISHABLE_MOVE_LIMIT = 15


def is_launcher(move: Move) -> bool:
    for raw in (move.on_hit, move.on_counter_hit):
        parsed = parse_frame_value(raw)
        if isinstance(parsed, Outcome) and parsed.tag is OutcomeTag.LAUNCH:
            return True
    return False


def key_move_reasons(move: Move) -> tuple[ClassificationReason, ...]:
    """All reasons ``move`` qualifies as a key move, in fixed order (may be empty)."""
    reasons: list[ClassificationReason] = []
    if is_launcher(move):
        reasons.append(ClassificationReason.LAUNCHER)

    startup = parse_startup(move.startup)
    if isinstance(startup, Numeric) and startup.value <= FAST_POKE_MAX_STARTUP:
        reasons.append(ClassificationReason.FAST_POKE)

    on_block = parse_frame_value(move.on_block)
    if isinstance(on_block, Numeric) and on_block.value >= PLUS_ON_BLOCK_MIN:
        reasons.append(ClassificationReason.PLUS_ON_BLOCK)

    if match_property(move.notes) is not None:
        reasons.append(ClassificationReason.SPECIAL_PROPERTY)

    return tuple(reasons)


def _key_move_sort_key(entry: ClassifiedMove) -> tuple[int, int, int, int]:
    # launchers < numeric block (higher first) < non-numeric block; then list position
    if entry.is_launcher:
        return (0, 0, 0, entry.index)
    block = numeric_value(parse_frame_value(entry.move.on_block))
    if block is None:
        return (1, 1, 0, entry.index)
    return (1, 0, -block, entry.index)


def _punishable_sort_key(entry: ClassifiedMove) -> tuple[int, int]:
    block = numeric_value(parse_frame_value(entry.move.on_block))
    # Only numeric moves reach here; the fallback keeps the comparator total.
    return (block if block is not None else 0, entry.index)


class MoveClassifier:
    """Selects and ranks the moves that matter for a matchup.

    ``key_move_limit`` / ``punishable_move_limit`` only bound output size for
    downstream prompts and reports; use ``all_key_moves`` / ``all_punishable_moves``
    for the complete, unranked selection.
    """

    def __init__(
        self,
        *,
        key_move_limit: int = DEFAULT_KEY_MOVE_LIMIT,
        punishable_move_limit: int = DEFAULT_PUNISHABLE_MOVE_LIMIT,
    ) -> None:
        if key_move_limit < 1 or punishable_move_limit < 1:
            raise ValueError("classification limits must be positive")
        self.key_move_limit = key_move_limit
        self.punishable_move_limit = punishable_move_limit

    def all_key_moves(self, moves: Sequence[Move]) -> ClassifiedMoveSet:
        selected = []
        for index, move in enumerate(moves):
            reasons = key_move_reasons(move)
            if reasons:
                selected.append(ClassifiedMove(index=index, move=move, reasons=reasons))
        return ClassifiedMoveSet(kind=ClassifiedSetKind.KEY_MOVES, moves=tuple(selected))

    def key_moves(self, moves: Sequence[Move]) -> ClassifiedMoveSet:
        candidates = self.all_key_moves(moves).moves
        ranked = sorted(candidates, key=_key_move_sort_key)
        return ClassifiedMoveSet(
            kind=ClassifiedSetKind.KEY_MOVES,
            moves=tuple(ranked[: self.key_move_limit]),
        )

    def all_punishable_moves(self, moves: Sequence[Move]) -> ClassifiedMoveSet:
        selected = []
        for index, move in enumerate(moves):
            block = numeric_value(parse_frame_value(move.on_block))
            if block is not None and block <= PUNISHABLE_MAX_ON_BLOCK:
                selected.append(
                    ClassifiedMove(
                        index=index,
                        move=move,
                        reasons=(ClassificationReason.PUNISHABLE,),
                    )
                )
        return ClassifiedMoveSet(kind=ClassifiedSetKind.PUNISHABLE_MOVES, moves=tuple(selected))

    def punishable_moves(self, moves: Sequence[Move]) -> ClassifiedMoveSet:
        candidates = self.all_punishable_moves(moves).moves
        ranked = sorted(candidates, key=_punishable_sort_key)
        return ClassifiedMoveSet(
            kind=ClassifiedSetKind.PUNISHABLE_MOVES,
            moves=tuple(ranked[: self.punishable_move_limit]),
        )
