"""
API package containing the service routers.

``router.ROUTERS`` maps each service id to the ``APIRouter`` defined
in ``endpoints/<service>.py``.
"""
