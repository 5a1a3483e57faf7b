"""Validation helpers for collaborator payloads."""

from framecoach.core.validation.json_validation import (
    validate_match_analysis,
    validate_match_analysis_json,
)

__all__ = ["validate_match_analysis", "validate_match_analysis_json"]
