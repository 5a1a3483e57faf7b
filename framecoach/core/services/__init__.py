"""Service layer implementing business logic.

Services connect ports (interfaces) with adapters (implementations),
providing high-level business operations to the application layer.
"""

from framecoach.core.services.character_data_cache import CacheEntry, CharacterDataCache
from framecoach.core.services.matchup_context_builder import MatchupContextBuilder

__all__ = [
    "CacheEntry",
    "CharacterDataCache",
    "MatchupContextBuilder",
]
