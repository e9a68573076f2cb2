from pathlib import Path

import pytest

from tests.infrastructure.seed import seed_database


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "club.db"
    seed_database(path)
    return path
