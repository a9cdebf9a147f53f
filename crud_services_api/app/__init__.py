"""
Application package initializer.

This package contains the service applications and all of their
submodules.  Each service (auth, covid, movies, ...) has a router in
``api/endpoints``, a service class in ``services`` and its own SQLite
database.  ``main.create_app`` assembles one service into a FastAPI
application.
"""
