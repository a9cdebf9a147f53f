"""
Registry of the service routers.

Maps every service id to the router of its endpoints module.  When a
service is added, give it a schema in ``core.db``, a database file in
``core.config`` and an entry here.
"""

from typing import Dict

from fastapi import APIRouter

from .endpoints import auth, covid, covid_portal, cricket_team, movies, player_stats, twitter

ROUTERS: Dict[str, APIRouter] = {
    "auth": auth.router,
    "covid": covid.router,
    "covid_portal": covid_portal.router,
    "movies": movies.router,
    "player_stats": player_stats.router,
    "twitter": twitter.router,
    "cricket_team": cricket_team.router,
}

# OpenAPI tags, one per service
TAGS: Dict[str, str] = {
    "auth": "users",
    "covid": "covid",
    "covid_portal": "covid",
    "movies": "movies",
    "player_stats": "cricket",
    "twitter": "tweets",
    "cricket_team": "cricket",
}
