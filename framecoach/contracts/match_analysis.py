"""
Structured matchup analysis returned by the LLM collaborator.

Only syntactic well-formedness is checked here; whether the advice is
correct for the matchup is not this package's concern.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _AnalysisContract(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)


class KeyMoveAdvice(_AnalysisContract):
    name: str = Field(..., min_length=1)
    notation: str = Field(..., min_length=1)
    description: str = Field(..., min_length=10)
    priority: Literal["high", "medium", "low"]


class CounterAdvice(_AnalysisContract):
    move: str = Field(..., min_length=1, description="Opponent move")
    counter: str = Field(..., min_length=1, description="Recommended answer")
    frame_advantage: int = Field(..., alias="frameAdvantage", strict=True)


class StrategyAdvice(_AnalysisContract):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=20)
    conditions: list[str] = Field(..., min_length=1)


class MatchAnalysis(_AnalysisContract):
    summary: str | None = None
    key_moves: list[KeyMoveAdvice] = Field(..., alias="keyMoves", min_length=1)
    counters: list[CounterAdvice] = Field(..., min_length=1)
    strategies: list[StrategyAdvice] = Field(..., min_length=1)
    tips: list[str] = Field(..., min_length=1)
