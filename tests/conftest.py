"""Pytest configuration and shared fixtures for framecoach tests.

Nothing here touches the network: the cache and builder are driven by
fake fetch functions and a hand-cranked clock.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from framecoach.contracts.frame_data import Move


def _move_record(command: str, **fields: Any) -> dict[str, Any]:
    """Raw upstream record (wire spelling) with empty defaults."""
    record: dict[str, Any] = {
        "moveNumber": 1,
        "command": command,
        "hitLevel": "m",
        "damage": "10",
        "startup": "",
        "block": "",
        "hit": "",
        "counterHit": "",
        "notes": "",
    }
    record.update(fields)
    return record


@pytest.fixture
def make_record() -> Callable[..., dict[str, Any]]:
    return _move_record


@pytest.fixture
def make_move() -> Callable[..., Move]:
    def _make(command: str, **fields: str) -> Move:
        return Move(command=command, **fields)

    return _make


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class FakeFetch:
    """Scripted upstream: payload (or exception) per character id, counts calls.

    With ``gate`` set, every fetch waits for the event before answering so
    tests can pile up concurrent callers on one in-flight request.
    """

    def __init__(self, payloads: dict[str, Any] | None = None) -> None:
        self.payloads: dict[str, Any] = dict(payloads or {})
        self.calls: list[str] = []
        self.gate: asyncio.Event | None = None

    async def __call__(self, character_id: str) -> Any:
        self.calls.append(character_id)
        if self.gate is not None:
            await self.gate.wait()
        payload = self.payloads.get(character_id)
        if isinstance(payload, BaseException):
            raise payload
        if payload is None:
            return {"framesNormal": []}
        return payload

    def count(self, character_id: str) -> int:
        return self.calls.count(character_id)


@pytest.fixture
def fake_fetch() -> FakeFetch:
    return FakeFetch()
