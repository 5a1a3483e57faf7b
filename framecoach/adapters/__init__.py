"""Adapters for external services."""

from framecoach.adapters.tekkendocs import TekkenDocsAdapter, TekkenDocsAPIError

__all__ = ["TekkenDocsAdapter", "TekkenDocsAPIError"]
