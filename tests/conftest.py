"""Shared fixtures: a fixed incident start time, a scripted chat model and an API client."""

from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from chronosec.ai.router import get_llm
from chronosec.main import app

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def scripted_llm(*replies):
    """Chat model double whose ``ainvoke`` returns ``replies`` in order (exceptions are raised)."""
    llm = MagicMock()
    llm.ainvoke = AsyncMock(
        side_effect=[r if isinstance(r, Exception) else SimpleNamespace(content=r) for r in replies]
    )
    return llm


@pytest.fixture
def start_time() -> datetime:
    return START


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_llm():
    """Install a scripted chat model for the AI routes."""

    def _install(*replies):
        llm = scripted_llm(*replies)
        app.dependency_overrides[get_llm] = lambda: llm
        return llm

    yield _install
    app.dependency_overrides.clear()
