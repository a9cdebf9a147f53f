"""
Shared test configuration.

Every test runs against fresh SQLite files in its own temporary
directory.  ``client_for`` builds a started ``TestClient`` for a
service and ``seed`` inserts fixture rows for tables that have no
create endpoint (states, directors, matches, follows, ...).
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator, Sequence
from contextlib import ExitStack
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from crud_services_api.app.core.config import DEFAULT_DATABASE_FILES, settings  # noqa: E402
from crud_services_api.app.core.db import get_cursor, init_db  # noqa: E402
from crud_services_api.app.main import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_databases(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every service database at the test's temporary directory."""

    monkeypatch.setattr(settings, "data_dir", str(tmp_path))
    monkeypatch.setattr(settings, "database_files", dict(DEFAULT_DATABASE_FILES))
    monkeypatch.setattr(settings, "secret_key", "test-secret")
    return tmp_path


@pytest.fixture
def client_for() -> Iterator[Callable[[str], TestClient]]:
    """Factory returning a started TestClient for a service id."""

    with ExitStack() as stack:

        def _client(service: str) -> TestClient:
            return stack.enter_context(TestClient(create_app(service)))

        yield _client


def seed(service: str, sql: str, rows: Sequence[Sequence[Any]]) -> None:
    """Insert ``rows`` into a service database, creating its tables first."""

    init_db(service)
    with get_cursor(service) as cursor:
        cursor.executemany(sql, rows)


def fetch_all(service: str, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
    with get_cursor(service) as cursor:
        return [dict(row) for row in cursor.execute(sql, tuple(params)).fetchall()]
