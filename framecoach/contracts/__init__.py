"""Contract models for data validation."""

from .frame_data import FrameDataResponse, Move
from .match_analysis import CounterAdvice, KeyMoveAdvice, MatchAnalysis, StrategyAdvice
from .matchup import (
    ClassificationReason,
    ClassifiedMove,
    ClassifiedMoveSet,
    ClassifiedSetKind,
    FrameAdvantageEntry,
    MatchupContext,
    PunishCandidate,
    PunishWindow,
)

__all__ = [
    "Move",
    "FrameDataResponse",
    "ClassificationReason",
    "ClassifiedSetKind",
    "ClassifiedMove",
    "ClassifiedMoveSet",
    "PunishCandidate",
    "PunishWindow",
    "FrameAdvantageEntry",
    "MatchupContext",
    "MatchAnalysis",
    "KeyMoveAdvice",
    "CounterAdvice",
    "StrategyAdvice",
]
