"""Frame value parsing: raw frame-data text -> typed value.

Every input yields exactly one of ``Numeric``, ``Outcome`` or ``Unknown``;
nothing here raises. Rules, in order:

1. Integer: optional leading ``+`` is dropped, then the rest must be a whole
   (optionally negative) integer. ``"+11"`` -> 11, ``"-31"`` -> -31.
2. Range: ``"17-18"``, ``"13~14"``, ``"-12~-11"`` keep their FIRST number as
   the representative value; the second is kept on ``range_end`` and the raw
   text on ``raw`` so a different range policy never needs a re-parse.
3. Outcome: case-insensitive substring match against
   ``vocabulary.OUTCOME_VOCABULARY``, first entry wins.
4. Anything else (empty, ``"+??"``, ``"+5c"``, numbers longer than six
   digits) is ``Unknown``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from framecoach.core.frames.vocabulary import OutcomeTag, match_outcome

_INT_RE = re.compile(r"-?\d{1,6}")
_RANGE_RE = re.compile(r"([+-]?\d{1,6})\s*[~-]\s*([+-]?\d{1,6})")
_STARTUP_MARKER_RE = re.compile(r"^[iI]\s*")

SAFE_ON_BLOCK_THRESHOLD = -9


@dataclass(frozen=True, slots=True)
class Numeric:
    value: int
    raw: str = field(default="", compare=False)
    range_end: int | None = field(default=None, compare=False)

    @property
    def is_range(self) -> bool:
        return self.range_end is not None


@dataclass(frozen=True, slots=True)
class Outcome:
    tag: OutcomeTag
    raw: str = field(default="", compare=False)


@dataclass(frozen=True, slots=True)
class Unknown:
    raw: str = field(default="", compare=False)


ParsedFrameValue = Numeric | Outcome | Unknown


def parse_frame_value(raw: str | None) -> ParsedFrameValue:
    """Parse one raw frame field (on-block, on-hit, counter-hit, startup)."""
    if not isinstance(raw, str):
        return Unknown(raw="" if raw is None else str(raw))

    text = raw.strip()
    if not text:
        return Unknown(raw=raw)

    body = text[1:] if text.startswith("+") else text
    if _INT_RE.fullmatch(body):
        return Numeric(int(body), raw=raw)

    ranged = _RANGE_RE.fullmatch(text)
    if ranged:
        return Numeric(int(ranged.group(1)), raw=raw, range_end=int(ranged.group(2)))

    tag = match_outcome(text)
    if tag is not None:
        return Outcome(tag, raw=raw)

    return Unknown(raw=raw)


def parse_startup(raw: str | None) -> ParsedFrameValue:
    """Parse a startup field, accepting the ``i10`` style "impact frame" prefix."""
    if isinstance(raw, str):
        stripped = _STARTUP_MARKER_RE.sub("", raw.strip(), count=1)
        parsed = parse_frame_value(stripped)
        if isinstance(parsed, Numeric):
            return Numeric(parsed.value, raw=raw, range_end=parsed.range_end)
        return parse_frame_value(raw)
    return parse_frame_value(raw)


def numeric_value(parsed: ParsedFrameValue) -> int | None:
    return parsed.value if isinstance(parsed, Numeric) else None


def is_safe_on_block(raw: str | None) -> bool:
    """True when the block value is a number no worse than -9."""
    value = numeric_value(parse_frame_value(raw))
    return value is not None and value >= SAFE_ON_BLOCK_THRESHOLD
