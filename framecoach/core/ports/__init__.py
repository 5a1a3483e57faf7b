"""Port interfaces for hexagonal architecture.

These ports define the contracts between the core domain and external adapters.
All external dependencies must implement these interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

__all__ = [
    "FrameDataPort",
    "FetchFrameData",
]

# Anything the cache can call to get one character's raw payload.
FetchFrameData = Callable[[str], Awaitable[Any]]


class FrameDataPort(ABC):
    """Port for the external character frame-data source."""

    @abstractmethod
    async def fetch_frame_data(self, character_id: str) -> Any:
        """Fetch the raw frame-data payload for one character.

        Expected shape is a mapping with a ``framesNormal`` list (or the list
        itself). Transport failures raise ``FetchError``.
        """
        pass

    async def close(self) -> None:
        """Release transport resources (no-op by default)."""
        return None
