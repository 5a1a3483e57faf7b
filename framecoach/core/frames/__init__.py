"""Frame-data reading: parsing, classification and punish windows."""

from framecoach.core.frames.classifier import MoveClassifier
from framecoach.core.frames.parser import (
    Numeric,
    Outcome,
    ParsedFrameValue,
    Unknown,
    is_safe_on_block,
    parse_frame_value,
    parse_startup,
)
from framecoach.core.frames.punish import PUNISH_BUCKETS, PunishWindowBuilder, frame_advantage
from framecoach.core.frames.vocabulary import VOCABULARY_VERSION, OutcomeTag

__all__ = [
    "MoveClassifier",
    "Numeric",
    "Outcome",
    "Unknown",
    "ParsedFrameValue",
    "OutcomeTag",
    "VOCABULARY_VERSION",
    "PUNISH_BUCKETS",
    "PunishWindowBuilder",
    "frame_advantage",
    "is_safe_on_block",
    "parse_frame_value",
    "parse_startup",
]
