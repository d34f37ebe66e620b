import asyncio

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text

from research_node.api.auth_gate import require_user
from research_node.api.dependencies import get_pipeline_context
from research_node.core.auth import hash_password, is_password_hash, verify_password
from research_node.core.request_context import PipelineContext
from research_node.main import create_app
from tests.conftest import USERS, seed_database
from tools.rehash_passwords import rehash


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "alice-token"},
        {"Authorization": "bearer alice-token"},
        {"Authorization": "Token alice-token"},
        {"Authorization": "Bearer unknown-token"},
        {"Authorization": "Bearer "},
    ],
)
def test_auth_gate_rejects_missing_malformed_and_unknown_tokens(client, headers):
    response = client.get("/items", headers=headers)

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"


def test_auth_gate_accepts_seeded_token(client, auth_headers):
    response = client.get("/items", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == []


def test_auth_gate_binds_identity_to_request(client):
    app = client.app

    @app.get("/whoami", dependencies=[Depends(require_user)])
    async def whoami(context: PipelineContext = Depends(get_pipeline_context)) -> dict:
        return {"user": context.username}

    response = client.get("/whoami", headers={"Authorization": "Bearer bob-token"})

    assert response.status_code == 200
    assert response.json() == {"user": "bob"}


def test_auth_gate_reports_store_failure_as_internal_error(client, auth_headers, db_path):
    engine = create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE users"))
    engine.dispose()

    response = client.get("/items", headers=auth_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Database error"
    assert "users" in body["meta"]["reason"]


def test_login_returns_token(client):
    response = client.post("/login", json={"username": "alice", "password": "wonderland"})

    assert response.status_code == 200
    assert response.json() == {"token": "alice-token"}


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "alice", "password": "wrong"},
        {"username": "nobody", "password": "wonderland"},
        {"username": "", "password": ""},
    ],
)
def test_login_rejects_bad_credentials_without_saying_which(client, payload):
    response = client.post("/login", json=payload)

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"


def test_login_requires_both_fields(client):
    response = client.post("/login", json={"username": "alice"})

    assert response.status_code == 400


def test_login_token_opens_authenticated_routes(client):
    token = client.post("/login", json={"username": "bob", "password": "builder"}).json()["token"]

    response = client.get("/items", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


def test_login_with_pbkdf2_scheme(tmp_path, settings):
    db_path = tmp_path / "hashed.db"
    seed_database(
        db_path,
        [{"username": "carol", "password": hash_password("s3cret"), "token": "carol-token"}],
    )
    hashed_settings = settings.model_copy(
        update={
            "database_url_override": f"sqlite+aiosqlite:///{db_path}",
            "password_scheme": "pbkdf2",
        }
    )

    with TestClient(create_app(hashed_settings)) as client:
        ok = client.post("/login", json={"username": "carol", "password": "s3cret"})
        bad = client.post("/login", json={"username": "carol", "password": "nope"})

    assert ok.status_code == 200
    assert ok.json() == {"token": "carol-token"}
    assert bad.status_code == 401


def test_verify_password_rejects_malformed_hashes():
    stored = hash_password("pw", iterations=1000)

    assert verify_password("pw", stored)
    assert not verify_password("other", stored)
    assert not verify_password("pw", "plaintext")
    assert not verify_password("pw", "md5$1$salt$digest")
    assert not verify_password("", stored)


def test_rehash_tool_migrates_plaintext_rows_for_pbkdf2_login(settings, db_path):
    first = asyncio.run(rehash(settings))
    second = asyncio.run(rehash(settings))

    engine = create_engine(f"sqlite:///{db_path}")
    with engine.connect() as conn:
        stored = dict(conn.execute(text("SELECT username, password FROM users")).all())
    engine.dispose()

    assert first == len(USERS)
    assert second == 0
    assert all(is_password_hash(value) for value in stored.values())
    assert verify_password("wonderland", stored["alice"])

    hashed_settings = settings.model_copy(update={"password_scheme": "pbkdf2"})
    with TestClient(create_app(hashed_settings)) as hashed_client:
        response = hashed_client.post("/login", json={"username": "alice", "password": "wonderland"})

    assert response.status_code == 200
    assert response.json() == {"token": "alice-token"}


def test_is_password_hash_tells_hashes_from_plaintext():
    assert is_password_hash(hash_password("pw", iterations=1000))
    assert not is_password_hash("wonderland")
    assert not is_password_hash("pbkdf2_sha256$abc$salt$digest")
    assert not is_password_hash("")
    assert not is_password_hash(None)
