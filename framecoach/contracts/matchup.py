"""
Matchup contracts handed to downstream consumers (prompt builders, reports).

All models are frozen. Derived sets never copy move data: each entry carries
the same ``Move`` instance as the fetched list plus its index in that list.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from framecoach.contracts.frame_data import Move


class ClassificationReason(str, Enum):
    """Why a move was selected into a classified set."""

    LAUNCHER = "launcher"
    FAST_POKE = "fast-poke"
    PLUS_ON_BLOCK = "plus-on-block"
    SPECIAL_PROPERTY = "special-property"
    PUNISHABLE = "punishable"


class ClassifiedSetKind(str, Enum):
    KEY_MOVES = "key-moves"
    PUNISHABLE_MOVES = "punishable-moves"


class _FrozenContract(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ClassifiedMove(_FrozenContract):
    index: int = Field(..., ge=0, description="Position in the original move list")
    move: Move
    reasons: tuple[ClassificationReason, ...] = Field(..., min_length=1)

    @property
    def command(self) -> str:
        return self.move.command

    @property
    def is_launcher(self) -> bool:
        return ClassificationReason.LAUNCHER in self.reasons


class ClassifiedMoveSet(_FrozenContract):
    """Ordered, deterministic selection of moves from one character's list."""

    kind: ClassifiedSetKind
    moves: tuple[ClassifiedMove, ...] = Field(default_factory=tuple)

    @property
    def size(self) -> int:
        return len(self.moves)

    def commands(self) -> list[str]:
        return [entry.move.command for entry in self.moves]


class PunishCandidate(_FrozenContract):
    index: int = Field(..., ge=0)
    move: Move
    startup: int = Field(..., gt=0, description="Parsed startup frames")


class PunishWindow(_FrozenContract):
    """One punish timing bucket with at least one candidate move."""

    label: str
    min_startup: int = Field(..., gt=0)
    max_startup: int | None = Field(default=None, description="None means open-ended")
    candidates: tuple[PunishCandidate, ...] = Field(..., min_length=1)
    situations: tuple[str, ...] = Field(default_factory=tuple)


class FrameAdvantageEntry(_FrozenContract):
    """Frames left over after punishing ``opponent_move`` with ``punish_move``."""

    opponent_index: int = Field(..., ge=0)
    opponent_move: Move
    punish_index: int = Field(..., ge=0)
    punish_move: Move
    window_label: str
    advantage: int | None = Field(default=None, description="None when either side is non-numeric")

    @property
    def is_known(self) -> bool:
        return self.advantage is not None

    @property
    def advantage_label(self) -> str:
        return "unknown" if self.advantage is None else f"{self.advantage:+d}"


class MatchupContext(_FrozenContract):
    """Immutable matchup aggregate, safe to share across concurrent readers."""

    player_character: str
    opponent_character: str
    player_character_id: str
    opponent_character_id: str
    player_moves: tuple[Move, ...]
    opponent_moves: tuple[Move, ...]
    player_key_moves: ClassifiedMoveSet
    opponent_punishable_moves: ClassifiedMoveSet
    punish_windows: tuple[PunishWindow, ...] = Field(default_factory=tuple)
    frame_advantages: tuple[FrameAdvantageEntry, ...] = Field(default_factory=tuple)

    def window(self, label: str) -> PunishWindow | None:
        for window in self.punish_windows:
            if window.label == label:
                return window
        return None
