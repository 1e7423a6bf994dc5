"""Global test fixtures for intercom."""

from __future__ import annotations

import asyncio
import os

import pytest

from intercom import Intercom


@pytest.fixture(autouse=True)
def clean_intercom_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep INTERCOM_* variables from leaking into config defaults."""
    for key in list(os.environ):
        if key.upper().startswith("INTERCOM_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def intercom() -> Intercom:
    """Dispatcher with default configuration."""
    return Intercom()


@pytest.fixture
def strict_intercom() -> Intercom:
    """Dispatcher with every strict policy turned on."""
    return Intercom(
        {
            "prevent_duplicated_event_listeners": True,
            "throw_error_if_no_event_handler_found": True,
            "throw_error_if_no_method_handler_found": True,
        }
    )


async def _drain(rounds: int = 5) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def drain():
    """Coroutine letting scheduled callbacks and tasks run."""
    return _drain
