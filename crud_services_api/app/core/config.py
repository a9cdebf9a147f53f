"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so every
service can start without any configuration.  Each service keeps its
own SQLite file; the file names default to the ones the services have
always used and may be overridden per service with
``<SERVICE>_DATABASE_URL`` (for example ``MOVIES_DATABASE_URL``).
"""

import os
from dataclasses import dataclass, field
from typing import Dict


DEFAULT_DATABASE_FILES: Dict[str, str] = {
    "auth": "userData.db",
    "covid": "covid19India.db",
    "covid_portal": "covid19IndiaPortal.db",
    "movies": "moviesData.db",
    "player_stats": "cricketMatchDetails.db",
    "twitter": "twitterClone.db",
    "cricket_team": "cricketTeam.db",
}


def _database_files_from_env() -> Dict[str, str]:
    return {
        service: os.getenv(f"{service.upper()}_DATABASE_URL", filename)
        for service, filename in DEFAULT_DATABASE_FILES.items()
    }


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "CRUD Services API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Directory holding the service databases.  Empty means the
    # project root; relative file names are resolved against it.
    data_dir: str = os.getenv("DATA_DIR", "")
    database_files: Dict[str, str] = field(default_factory=_database_files_from_env)

    # Used by run.py: service n of the registry listens on base_port + n.
    host: str = os.getenv("HOST", "0.0.0.0")
    base_port: int = int(os.getenv("BASE_PORT", "3000"))

    # Service served by ``crud_services_api.app.main:app``.
    service: str = os.getenv("SERVICE", "twitter")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
