"""Unified entry point for the CRUD services.

This script launches the requested services concurrently, each as its
own FastAPI application on its own port.  Service number *n* of the
registry listens on ``BASE_PORT + n`` (``auth`` on 3000, ``covid`` on
3001, ... with the default base port).

Configuration such as SECRET_KEY, DATA_DIR, HOST and BASE_PORT is
read from the environment; see ``crud_services_api/app/core/config.py``.

Usage:
    python run.py                 # every service
    python run.py twitter movies  # only these two
"""
import argparse
import asyncio
import logging
from typing import Dict, List, Optional

from uvicorn import Config, Server

from crud_services_api.app.api.router import ROUTERS
from crud_services_api.app.core.config import settings
from crud_services_api.app.main import create_app

logger = logging.getLogger("crud_services_api.run")


def service_ports(services: List[str]) -> Dict[str, int]:
    """Map each requested service to its port."""
    order = list(ROUTERS)
    return {service: settings.base_port + order.index(service) for service in services}


async def run_service(service: str, port: int) -> None:
    """Serve one service with Uvicorn until it stops."""
    config = Config(app=create_app(service), host=settings.host, port=port, reload=False, log_level="info")
    server = Server(config)
    logger.info("Starting %s on http://%s:%s/", service, settings.host, port)
    await server.serve()


async def main(services: List[str]) -> None:
    """Run the services concurrently; stop all of them when one fails."""
    tasks = [
        asyncio.create_task(run_service(service, port))
        for service, port in service_ports(services).items()
    ]
    done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    for task in done:
        if exception := task.exception():
            logger.error("Exception in service", exc_info=exception)
    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Start CRUD services.")
    parser.add_argument(
        "services",
        nargs="*",
        metavar="service",
        help=f"Services to start (default: all). Choices: {', '.join(ROUTERS)}",
    )
    args = parser.parse_args(argv)
    unknown = [service for service in args.services if service not in ROUTERS]
    if unknown:
        parser.error(f"unknown service(s): {', '.join(unknown)}")
    # Keep registry order and drop duplicates
    args.services = [service for service in ROUTERS if service in args.services] or list(ROUTERS)
    return args


if __name__ == "__main__":
    try:
        asyncio.run(main(parse_args().services))
    except (KeyboardInterrupt, SystemExit):
        pass
