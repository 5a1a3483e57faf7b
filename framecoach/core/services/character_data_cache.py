"""
Character Data Cache - TTL memo of per-character move lists.

Behaviour:
- Hit younger than the TTL: returned without I/O.
- Miss / expired: exactly one upstream fetch per character id at a time;
  concurrent callers attach to the same in-flight task and share its
  result or its failure.
- TTL counts from fetch completion, not last access (no LRU).
- Malformed and empty payloads are never cached.
- A caller giving up (cancel or per-call timeout) never cancels the shared
  fetch; it still completes and populates the cache for the next caller.

Clock and fetch function are injected so expiry and failures are testable
without real time or network.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from framecoach.contracts.frame_data import FrameDataResponse, Move
from framecoach.core.errors import DataEmpty, FetchError
from framecoach.core.ports import FetchFrameData

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_FETCH_TIMEOUT_SECONDS = 15.0

MoveList = tuple[Move, ...]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    character_id: str
    moves: MoveList
    fetched_at: float


def coerce_move_list(payload: Any, character_id: str) -> MoveList:
    """Validate the upstream payload shape and build immutable ``Move`` records."""
    try:
        if isinstance(payload, Mapping):
            if not isinstance(payload.get("framesNormal"), list | tuple):
                raise FetchError(
                    f"Invalid response structure for {character_id}: framesNormal is not a list",
                    character_id=character_id,
                )
            moves = FrameDataResponse.model_validate(payload).frames_normal
        elif isinstance(payload, list | tuple):
            moves = tuple(Move.model_validate(record) for record in payload)
        else:
            raise FetchError(
                f"Invalid response structure for {character_id}: "
                f"expected mapping or list, got {type(payload).__name__}",
                character_id=character_id,
            )
    except ValidationError as e:
        raise FetchError(
            f"Malformed frame data for {character_id}: {e.error_count()} validation errors",
            character_id=character_id,
        ) from e

    if not moves:
        raise DataEmpty(f"No moves returned for {character_id}", character_id=character_id)
    return moves


class CharacterDataCache:
    """In-memory TTL cache with single-flight fetches per character id."""

    def __init__(
        self,
        fetch: FetchFrameData,
        *,
        ttl_s: float = DEFAULT_TTL_SECONDS,
        fetch_timeout_s: float | None = DEFAULT_FETCH_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_s <= 0:
            raise ValueError("ttl_s must be positive")
        self._fetch = fetch
        self._ttl = float(ttl_s)
        self._fetch_timeout = fetch_timeout_s
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._inflight: dict[str, asyncio.Task[MoveList]] = {}

    def peek(self, character_id: str) -> CacheEntry | None:
        """Return the live entry for ``character_id`` without fetching."""
        entry = self._entries.get(character_id)
        if entry is None or self._is_expired(entry):
            return None
        return entry

    def is_fetching(self, character_id: str) -> bool:
        return character_id in self._inflight

    async def get(self, character_id: str, *, timeout: float | None = None) -> MoveList:
        """Return the move list for ``character_id``.

        Raises:
            FetchError: source unreachable, timed out or malformed payload
            DataEmpty: source returned zero moves
        """
        entry = self.peek(character_id)
        if entry is not None:
            logger.debug(f"Frame data cache hit for {character_id}")
            return entry.moves

        task = self._inflight.get(character_id)
        if task is None:
            task = asyncio.create_task(self._load(character_id), name=f"frame-data:{character_id}")
            self._inflight[character_id] = task
            task.add_done_callback(lambda done, cid=character_id: self._on_done(cid, done))
        else:
            logger.debug(f"Joining in-flight fetch for {character_id}")

        try:
            # shield: a waiter leaving must not cancel the shared fetch
            return await asyncio.wait_for(asyncio.shield(task), timeout)
        except TimeoutError as e:
            raise FetchError(
                f"Timed out after {timeout}s waiting for frame data of {character_id}",
                character_id=character_id,
            ) from e

    async def get_many(self, character_ids: Iterable[str]) -> list[MoveList]:
        """Fetch several characters concurrently; results follow argument order."""
        return list(await asyncio.gather(*(self.get(cid) for cid in character_ids)))

    def clear(self, character_id: str | None = None) -> None:
        """Evict one entry, or everything when ``character_id`` is None."""
        if character_id is None:
            self._entries.clear()
            logger.info("Cleared all frame data cache entries")
            return
        if self._entries.pop(character_id, None) is not None:
            logger.info(f"Cleared frame data cache for {character_id}")

    def _is_expired(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.fetched_at >= self._ttl

    async def _load(self, character_id: str) -> MoveList:
        logger.info(f"Fetching frame data for {character_id}")
        try:
            if self._fetch_timeout is None:
                payload = await self._fetch(character_id)
            else:
                payload = await asyncio.wait_for(self._fetch(character_id), self._fetch_timeout)
        except FetchError:
            raise
        except TimeoutError as e:
            raise FetchError(
                f"Frame data fetch for {character_id} timed out after {self._fetch_timeout}s",
                character_id=character_id,
            ) from e
        except Exception as e:
            raise FetchError(
                f"Failed to fetch frame data for {character_id}: {e}",
                character_id=character_id,
            ) from e

        moves = coerce_move_list(payload, character_id)
        self._entries[character_id] = CacheEntry(
            character_id=character_id, moves=moves, fetched_at=self._clock()
        )
        logger.info(f"Cached {len(moves)} moves for {character_id}")
        return moves

    def _on_done(self, character_id: str, task: asyncio.Task[MoveList]) -> None:
        if self._inflight.get(character_id) is task:
            del self._inflight[character_id]
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"Frame data fetch failed for {character_id}: {error}")
