"""Frame-data normalization and matchup classification engine."""

__version__ = "0.1.0"
