"""
SQLite database integration.

This module provides functions for obtaining a connection to a
service's database (``get_connection``), a cursor context manager
(``get_cursor``) and schema bootstrap on application start
(``init_db``).  Every service owns exactly one SQLite file; the
service id (``"movies"``, ``"twitter"``, ...) selects it.

Schemas are created with ``CREATE TABLE IF NOT EXISTS`` so that a
pre-populated database file is used as is.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator

from .config import settings

logger = logging.getLogger(__name__)


_USER_TABLE = """
CREATE TABLE IF NOT EXISTS user (
    username TEXT PRIMARY KEY,
    name TEXT,
    password TEXT NOT NULL,
    gender TEXT,
    location TEXT
);
"""

_COVID_TABLES = """
CREATE TABLE IF NOT EXISTS state (
    state_id INTEGER PRIMARY KEY AUTOINCREMENT,
    state_name TEXT NOT NULL,
    population INTEGER
);

CREATE TABLE IF NOT EXISTS district (
    district_id INTEGER PRIMARY KEY AUTOINCREMENT,
    district_name TEXT NOT NULL,
    state_id INTEGER NOT NULL,
    cases INTEGER DEFAULT 0,
    cured INTEGER DEFAULT 0,
    active INTEGER DEFAULT 0,
    deaths INTEGER DEFAULT 0,
    FOREIGN KEY(state_id) REFERENCES state(state_id)
);
CREATE INDEX IF NOT EXISTS idx_district_state_id ON district(state_id);
"""

SCHEMAS: Dict[str, str] = {
    "auth": _USER_TABLE,
    "covid": _COVID_TABLES,
    "covid_portal": _USER_TABLE + _COVID_TABLES,
    "movies": """
        CREATE TABLE IF NOT EXISTS director (
            director_id INTEGER PRIMARY KEY AUTOINCREMENT,
            director_name TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS movie (
            movie_id INTEGER PRIMARY KEY AUTOINCREMENT,
            director_id INTEGER NOT NULL,
            movie_name TEXT NOT NULL,
            lead_actor TEXT,
            FOREIGN KEY(director_id) REFERENCES director(director_id)
        );
        CREATE INDEX IF NOT EXISTS idx_movie_director_id ON movie(director_id);
    """,
    "player_stats": """
        CREATE TABLE IF NOT EXISTS player_details (
            player_id INTEGER PRIMARY KEY AUTOINCREMENT,
            player_name TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS match_details (
            match_id INTEGER PRIMARY KEY AUTOINCREMENT,
            match TEXT NOT NULL,
            year INTEGER
        );

        CREATE TABLE IF NOT EXISTS player_match_score (
            player_match_id INTEGER PRIMARY KEY AUTOINCREMENT,
            player_id INTEGER NOT NULL,
            match_id INTEGER NOT NULL,
            score INTEGER DEFAULT 0,
            fours INTEGER DEFAULT 0,
            sixes INTEGER DEFAULT 0,
            FOREIGN KEY(player_id) REFERENCES player_details(player_id),
            FOREIGN KEY(match_id) REFERENCES match_details(match_id)
        );
        CREATE INDEX IF NOT EXISTS idx_player_match_score_player_id ON player_match_score(player_id);
        CREATE INDEX IF NOT EXISTS idx_player_match_score_match_id ON player_match_score(match_id);
    """,
    "twitter": """
        CREATE TABLE IF NOT EXISTS user (
            user_id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT,
            username TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            gender TEXT
        );

        CREATE TABLE IF NOT EXISTS follower (
            follower_id INTEGER PRIMARY KEY AUTOINCREMENT,
            follower_user_id INTEGER NOT NULL,
            following_user_id INTEGER NOT NULL,
            FOREIGN KEY(follower_user_id) REFERENCES user(user_id),
            FOREIGN KEY(following_user_id) REFERENCES user(user_id)
        );

        CREATE TABLE IF NOT EXISTS tweet (
            tweet_id INTEGER PRIMARY KEY AUTOINCREMENT,
            tweet TEXT NOT NULL,
            user_id INTEGER NOT NULL,
            date_time TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES user(user_id)
        );

        CREATE TABLE IF NOT EXISTS reply (
            reply_id INTEGER PRIMARY KEY AUTOINCREMENT,
            tweet_id INTEGER NOT NULL,
            reply TEXT NOT NULL,
            user_id INTEGER NOT NULL,
            date_time TEXT NOT NULL,
            FOREIGN KEY(tweet_id) REFERENCES tweet(tweet_id),
            FOREIGN KEY(user_id) REFERENCES user(user_id)
        );

        -- "like" is a keyword, keep it quoted everywhere
        CREATE TABLE IF NOT EXISTS "like" (
            like_id INTEGER PRIMARY KEY AUTOINCREMENT,
            tweet_id INTEGER NOT NULL,
            user_id INTEGER NOT NULL,
            date_time TEXT NOT NULL,
            FOREIGN KEY(tweet_id) REFERENCES tweet(tweet_id),
            FOREIGN KEY(user_id) REFERENCES user(user_id)
        );

        CREATE INDEX IF NOT EXISTS idx_follower_follower_user_id ON follower(follower_user_id);
        CREATE INDEX IF NOT EXISTS idx_follower_following_user_id ON follower(following_user_id);
        CREATE INDEX IF NOT EXISTS idx_tweet_user_id ON tweet(user_id);
        CREATE INDEX IF NOT EXISTS idx_reply_tweet_id ON reply(tweet_id);
        CREATE INDEX IF NOT EXISTS idx_like_tweet_id ON "like"(tweet_id);
    """,
    "cricket_team": """
        CREATE TABLE IF NOT EXISTS cricket_team (
            player_id INTEGER PRIMARY KEY AUTOINCREMENT,
            player_name TEXT NOT NULL,
            jersey_number INTEGER,
            role TEXT
        );
    """,
}


def get_database_path(service: str) -> str:
    """Compute the path to the SQLite database file of ``service``.

    Absolute paths from the settings are used directly.  Relative
    ones are resolved against ``settings.data_dir`` or, when that is
    empty, the project root.
    """
    try:
        db_url = settings.database_files[service]
    except KeyError:
        raise ValueError(f"Unknown service {service!r}") from None
    if os.path.isabs(db_url):
        return db_url
    if settings.data_dir:
        base_dir = Path(settings.data_dir)
    else:
        base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(service: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection for ``service``.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign key enforcement is off by default in SQLite and is
    switched on for the lifetime of the connection.
    """
    conn = sqlite3.connect(get_database_path(service))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(service: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(service)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(service: str) -> None:
    """Create the tables of ``service`` if they do not exist yet."""
    path = get_database_path(service)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with get_cursor(service) as cursor:
        cursor.executescript(SCHEMAS[service])
    logger.info("Database for %s ready at %s", service, path)
