from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, insert

from research_node.core.config import Settings
from research_node.db.schema import Base, UserRow
from research_node.main import create_app

USERS = [
    {"username": "alice", "password": "wonderland", "token": "alice-token"},
    {"username": "bob", "password": "builder", "token": "bob-token"},
]


def seed_database(db_path: Path, users: list[dict]) -> None:
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(insert(UserRow), users)
    engine.dispose()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "research_node.db"
    seed_database(path, USERS)
    return path


@pytest.fixture
def settings(tmp_path: Path, db_path: Path) -> Settings:
    return Settings(
        database_url_override=f"sqlite+aiosqlite:///{db_path}",
        performance_log_path=tmp_path / "performance_metrics.json",
        docker_metrics_path=tmp_path / "docker_metrics.json",
        log_level="DEBUG",
    )


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": "Bearer alice-token"}
