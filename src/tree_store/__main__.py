"""Entrypoint for running the FastAPI server."""

from __future__ import annotations

import logging

import uvicorn

from .config import get_settings

logger = logging.getLogger("tree_store")


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Tree store server starting on http://localhost:%d", settings.port)
    logger.info("API port: %d, data dir: %s", settings.port, settings.storage_root)
    uvicorn.run(
        "tree_store.api:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
