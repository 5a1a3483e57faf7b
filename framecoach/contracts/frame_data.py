"""
Frame-data contracts for the upstream character data source.

The wire format is TekkenDocs' `/api/{game}/{character}/framedata` payload.
Field names accept both the wire spelling (``block``, ``counterHit``) and the
Python spelling (``on_block``, ``on_counter_hit``).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Move(BaseModel):
    """One character action exactly as the source reports it.

    Every frame field stays raw text; interpretation belongs to
    ``framecoach.core.frames.parser``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    move_number: int | None = Field(default=None, alias="moveNumber")
    command: str = Field(..., description="Input notation, opaque to the engine")
    hit_level: str = Field(default="", alias="hitLevel")
    damage: str = Field(default="", description="Display-only damage text")
    startup: str = Field(default="")
    on_block: str = Field(default="", alias="block")
    on_hit: str = Field(default="", alias="hit")
    on_counter_hit: str = Field(default="", alias="counterHit")
    notes: str = Field(default="")

    @field_validator(
        "hit_level",
        "damage",
        "startup",
        "on_block",
        "on_hit",
        "on_counter_hit",
        "notes",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        # Source sheets leave cells empty (null) or occasionally emit bare numbers.
        if value is None:
            return ""
        if isinstance(value, bool):
            return value
        if isinstance(value, int | float):
            return str(value)
        return value

    @field_validator("command", mode="before")
    @classmethod
    def _coerce_command(cls, value: Any) -> Any:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class FrameDataResponse(BaseModel):
    """Full character payload returned by the frame-data source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    character_name: str = Field(default="", alias="characterName")
    edit_url: str = Field(default="", alias="editUrl")
    game: str | None = None
    frames_normal: tuple[Move, ...] = Field(..., alias="framesNormal")
    stances: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("character_name", "edit_url", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("stances", mode="before")
    @classmethod
    def _none_as_no_stances(cls, value: Any) -> Any:
        return () if value is None else value
