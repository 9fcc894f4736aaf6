"""Command line entry for the people service."""

from __future__ import annotations

import logging

import uvicorn

from people_service.api.main import app
from people_service.core.config import get_settings
from people_service.core.logging import configure_logging

logger = logging.getLogger(__name__)


def run_server() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info("listening on PORT %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


def main() -> None:
    run_server()


if __name__ == "__main__":
    main()
