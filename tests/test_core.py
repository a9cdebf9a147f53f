"""Tests for security helpers, configuration, error handling and the app factory."""

from __future__ import annotations

import logging
from pathlib import Path

import bcrypt
import pytest
from fastapi.testclient import TestClient

from crud_services_api.app.core.config import settings
from crud_services_api.app.core.db import get_database_path
from crud_services_api.app.core.logging_config import PACKAGE_LOGGER, setup_logging
from crud_services_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    issue_token,
    verify_password,
)
from crud_services_api.app.main import create_app
from crud_services_api.app.services.team_service import TeamService


def test_password_hash_round_trip() -> None:
    hashed = hash_password("richard_567")

    assert hashed != "richard_567"
    assert hashed != hash_password("richard_567")
    assert verify_password("richard_567", hashed)
    assert not verify_password("richard_568", hashed)


@pytest.mark.parametrize("stored", [None, "", "no-separator", "zz$zz"])
def test_verify_password_rejects_malformed_hash(stored) -> None:
    assert verify_password("richard_567", stored) is False


def test_token_carries_username_and_service() -> None:
    payload = decode_access_token(issue_token("JoeBiden", "twitter"))

    assert payload["username"] == "JoeBiden"
    assert payload["aud"] == "twitter"
    assert payload["exp"] > 0


def test_expired_token_is_rejected() -> None:
    token = create_access_token({"username": "JoeBiden", "aud": "twitter"}, expires_delta=-10)

    assert decode_access_token(token) is None


def test_zero_lifetime_token_is_rejected() -> None:
    token = create_access_token({"username": "JoeBiden", "aud": "twitter"}, expires_delta=0)

    assert decode_access_token(token) is None


def test_bcrypt_hashes_verify() -> None:
    stored = bcrypt.hashpw(b"christy@123", bcrypt.gensalt(rounds=4)).decode("utf-8")

    assert verify_password("christy@123", stored)
    assert not verify_password("christy@124", stored)
    assert verify_password("christy@123", "$2b$10$not-a-real-hash") is False


def test_token_signed_with_other_secret_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    token = issue_token("JoeBiden", "twitter")
    monkeypatch.setattr(settings, "secret_key", "another-secret")

    assert decode_access_token(token) is None


def test_tampered_token_is_rejected() -> None:
    header, _, signature = issue_token("JoeBiden", "twitter").split(".")
    forged_payload = issue_token("ElonMusk", "twitter").split(".")[1]

    assert decode_access_token(f"{header}.{forged_payload}.{signature}") is None
    assert decode_access_token("garbage") is None


def test_database_paths(isolated_databases: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_database_path("movies") == str((isolated_databases / "moviesData.db").resolve())

    absolute = str(isolated_databases / "elsewhere" / "movies.db")
    monkeypatch.setitem(settings.database_files, "movies", absolute)
    assert get_database_path("movies") == absolute

    with pytest.raises(ValueError):
        get_database_path("library")


def test_startup_creates_database(isolated_databases: Path) -> None:
    app = create_app("cricket_team")
    assert not (isolated_databases / "cricketTeam.db").exists()

    with TestClient(app):
        assert (isolated_databases / "cricketTeam.db").exists()
    assert app.router.on_startup == []


def test_create_app_rejects_unknown_service() -> None:
    with pytest.raises(ValueError):
        create_app("library")


def test_app_title_names_service() -> None:
    assert create_app("movies").title.endswith(": movies")


def test_unknown_route_is_plain_text(client_for) -> None:
    response = client_for("movies").get("/books/")

    assert response.status_code == 404
    assert response.text == "Not Found"
    assert response.headers["content-type"].startswith("text/plain")


def test_invalid_path_parameter_is_bad_request(client_for) -> None:
    response = client_for("movies").get("/movies/abc/")

    assert response.status_code == 400
    assert response.text.startswith("Invalid request: movie_id")


def test_unexpected_error_is_hidden(monkeypatch: pytest.MonkeyPatch) -> None:
    async def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(TeamService, "list_players", broken)

    with TestClient(create_app("cricket_team"), raise_server_exceptions=False) as client:
        response = client.get("/players/")

    assert response.status_code == 500
    assert response.text == "Internal Server Error"


def test_setup_logging_configures_package_logger_once(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    monkeypatch.setattr(package_logger, "handlers", [])
    monkeypatch.setattr(package_logger, "propagate", True)
    monkeypatch.setattr(package_logger, "level", package_logger.level)
    logfile = tmp_path / "logs" / "services.log"

    logger = setup_logging("debug", str(logfile))
    setup_logging("warning", str(tmp_path / "other.log"))
    logging.getLogger("crud_services_api.app.services.movie_service").warning("Added movie 7")
    for handler in logger.handlers:
        handler.flush()
        handler.close()

    assert logger is package_logger
    assert len(logger.handlers) == 2
    assert logger.level == logging.WARNING
    assert not logger.propagate
    assert "[WARNING] crud_services_api.app.services.movie_service: Added movie 7" in logfile.read_text(encoding="utf-8")
    assert not (tmp_path / "other.log").exists()
