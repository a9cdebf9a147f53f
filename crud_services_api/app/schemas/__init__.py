"""
Pydantic schema definitions for API payloads.

Each domain (users, covid, movies, cricket, tweets) defines its own
Pydantic models for request and response bodies.  Schemas are
separated from database rows to decouple the API representation
(camelCase) from persistence (snake_case).
"""
