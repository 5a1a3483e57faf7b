"""JSON validation for LLM matchup analysis payloads.

Applies strict Pydantic V2 validation; only structure is checked, never
whether the advice itself makes sense.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from framecoach.contracts.match_analysis import MatchAnalysis
from framecoach.core.observability import debug_wrapper

logger = logging.getLogger(__name__)


def _log_validation_error(error: ValidationError) -> None:
    first = error.errors()[0] if error.error_count() else {}
    logger.warning(
        f"Match analysis failed validation: {error.error_count()} errors, "
        f"first={first.get('type', 'validation_error')} at {first.get('loc', ())}"
    )


@debug_wrapper(
    capture_result=False,
    capture_args=False,
    log_level="DEBUG",
    add_metadata={"operation": "json_validate", "schema": "match_analysis"},
)
def validate_match_analysis_json(json_str: str | bytes) -> MatchAnalysis:
    """Validate and parse a raw LLM JSON response.

    Raises ValidationError on malformed JSON or schema violations.
    """
    try:
        return MatchAnalysis.model_validate_json(json_str)
    except ValidationError as e:
        _log_validation_error(e)
        raise


def validate_match_analysis(data: Any) -> MatchAnalysis:
    """Validate an already-decoded payload (dict)."""
    try:
        return MatchAnalysis.model_validate(data)
    except ValidationError as e:
        _log_validation_error(e)
        raise
