"""TekkenDocs frame-data adapter implementing FrameDataPort.

GET {base_url}/api/{game}/{character_id}/framedata -> JSON
``{characterName, editUrl, game, framesNormal: [...], stances: [...]}``

Shape validation and caching happen in CharacterDataCache; this adapter only
moves bytes and turns transport problems into ``TekkenDocsAPIError``.
Retries are left to callers.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import aiohttp

from framecoach.config.settings import get_settings
from framecoach.core.errors import FetchError
from framecoach.core.observability import trace_adapter
from framecoach.core.ports import FrameDataPort

logger = logging.getLogger(__name__)


class TekkenDocsAPIError(FetchError):
    def __init__(
        self, message: str, *, character_id: str | None = None, status_code: int | None = None
    ) -> None:
        super().__init__(message, character_id=character_id)
        self.status_code = status_code


class TekkenDocsAdapter(FrameDataPort):
    def __init__(
        self,
        *,
        base_url: str | None = None,
        game: str | None = None,
        session: aiohttp.ClientSession | None = None,
        request_timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.tekkendocs_base_url).rstrip("/")
        self._game = game or settings.tekkendocs_game
        self._user_agent = settings.tekkendocs_user_agent
        self._timeout = aiohttp.ClientTimeout(
            total=request_timeout or settings.frame_data_fetch_timeout_seconds
        )
        self._session = session
        self._session_loop: asyncio.AbstractEventLoop | None = None
        self._owns_session = session is None

    async def __aenter__(self) -> "TekkenDocsAdapter":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    def frame_data_url(self, character_id: str) -> str:
        return f"{self._base_url}/api/{self._game}/{quote(character_id)}/framedata"

    @trace_adapter
    async def fetch_frame_data(self, character_id: str) -> Any:
        url = self.frame_data_url(character_id)
        headers = {"Accept": "application/json", "User-Agent": self._user_agent}
        session = await self._ensure_session()
        try:
            async with session.get(url, headers=headers, timeout=self._timeout) as resp:
                if resp.status != 200:
                    logger.warning(f"TekkenDocs HTTP {resp.status} for {character_id}")
                    raise TekkenDocsAPIError(
                        f"HTTP {resp.status}: {resp.reason}",
                        character_id=character_id,
                        status_code=resp.status,
                    )
                return await resp.json(content_type=None)
        except TekkenDocsAPIError:
            raise
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            logger.error(f"TekkenDocs request failed for {character_id}: {e}")
            raise TekkenDocsAPIError(
                f"Failed to fetch frame data for {character_id}: {e}",
                character_id=character_id,
            ) from e

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None
            self._session_loop = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if not self._owns_session and self._session is not None:
            return self._session

        loop = asyncio.get_running_loop()
        needs_new_session = (
            self._session is None
            or self._session.closed
            or self._session_loop is not loop
        )
        if needs_new_session:
            if self._session and not self._session.closed:
                try:
                    await self._session.close()
                except Exception:
                    logger.warning("Failed to close stale TekkenDocs session", exc_info=True)
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._session_loop = loop
        return self._session
