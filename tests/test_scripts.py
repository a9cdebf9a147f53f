"""Tests for the ``run.py`` launcher and the ``manage_users.py`` tool."""

from __future__ import annotations

import pytest

import manage_users
import run
from conftest import fetch_all
from crud_services_api.app.core.config import settings
from crud_services_api.app.core.security import decode_access_token, verify_password


def test_parse_args_defaults_to_every_service() -> None:
    args = run.parse_args([])

    assert args.services == list(run.ROUTERS)


def test_parse_args_keeps_registry_order() -> None:
    args = run.parse_args(["twitter", "auth", "twitter"])

    assert args.services == ["auth", "twitter"]


def test_parse_args_rejects_unknown_service() -> None:
    with pytest.raises(SystemExit):
        run.parse_args(["library"])


def test_service_ports(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "base_port", 4000)

    assert run.service_ports(["auth", "movies", "cricket_team"]) == {
        "auth": 4000,
        "movies": 4003,
        "cricket_team": 4006,
    }


def _create(service: str, username: str = "christopher_phillips", password: str = "christy@123") -> int:
    return manage_users.main(
        [
            "create-user",
            "--service", service,
            "--username", username,
            "--password", password,
            "--name", "Christopher Phillips",
            "--gender", "male",
            "--location", "Delhi",
        ]
    )


def test_create_user(capsys: pytest.CaptureFixture) -> None:
    assert _create("covid_portal") == 0

    rows = fetch_all("covid_portal", "SELECT * FROM user")
    assert rows[0]["username"] == "christopher_phillips"
    assert rows[0]["location"] == "Delhi"
    assert verify_password("christy@123", rows[0]["password"])
    assert "User created" in capsys.readouterr().out


def test_create_twitter_user_ignores_location() -> None:
    assert _create("twitter", username="JoeBiden", password="biden@123") == 0

    rows = fetch_all("twitter", "SELECT * FROM user")
    assert rows[0]["user_id"] == 1
    assert "location" not in rows[0]


def test_create_user_failures(capsys: pytest.CaptureFixture) -> None:
    _create("auth")

    assert _create("auth") == 1
    assert _create("auth", username="someone", password="abc") == 1
    assert "User already exists" in capsys.readouterr().err


def test_reset_password() -> None:
    _create("auth")

    code = manage_users.main(
        ["reset-password", "--service", "auth", "--username", "christopher_phillips", "--password", "new_pass!"]
    )

    assert code == 0
    stored = fetch_all("auth", "SELECT password FROM user")[0]["password"]
    assert verify_password("new_pass!", stored)


def test_reset_password_unknown_user() -> None:
    code = manage_users.main(["reset-password", "--service", "auth", "--username", "ghost", "--password", "x1234"])

    assert code == 2


def test_reset_password_enforces_service_minimum(capsys: pytest.CaptureFixture) -> None:
    _create("twitter", username="JoeBiden", password="biden@123")
    before = fetch_all("twitter", "SELECT password FROM user")[0]["password"]

    code = manage_users.main(["reset-password", "--service", "twitter", "--username", "JoeBiden", "--password", "abcde"])

    assert code == 1
    assert "Password is too short" in capsys.readouterr().err
    assert fetch_all("twitter", "SELECT password FROM user")[0]["password"] == before


def test_issue_token_with_zero_days_is_already_expired(capsys: pytest.CaptureFixture) -> None:
    _create("covid_portal")
    capsys.readouterr()

    code = manage_users.main(
        ["issue-token", "--service", "covid_portal", "--username", "christopher_phillips", "--days", "0"]
    )

    assert code == 0
    assert decode_access_token(capsys.readouterr().out.strip()) is None


def test_issue_token(capsys: pytest.CaptureFixture) -> None:
    _create("covid_portal")
    capsys.readouterr()

    code = manage_users.main(
        ["issue-token", "--service", "covid_portal", "--username", "christopher_phillips", "--days", "2"]
    )

    assert code == 0
    payload = decode_access_token(capsys.readouterr().out.strip())
    assert payload["username"] == "christopher_phillips"
    assert payload["aud"] == "covid_portal"


def test_issue_token_unknown_user() -> None:
    code = manage_users.main(["issue-token", "--service", "twitter", "--username", "ghost"])

    assert code == 2
