from __future__ import annotations

from pathlib import Path

import pytest

from leaguestats.persistence import LeagueStore


@pytest.fixture
def store(tmp_path: Path) -> LeagueStore:
    return LeagueStore(tmp_path / "league.sqlite")


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
