"""
Endpoint subpackage.

Each module in this package defines an APIRouter for one service
(auth, covid, movies, ...).  The routers are registered by service id
in ``api/router.py`` and included by ``main.create_app``.
"""
