from __future__ import annotations

import argparse
import logging

import uvicorn

from landing_api.config import get_settings
from landing_api.observability.logging import configure_logging

logger = logging.getLogger("landing_api")


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Landing page metrics and contact API")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    logger.info("%s listening on http://%s:%s", settings.app_name, args.host, args.port)
    for path in ("/api/metrics", "/api/stats", "/api/contact", "/health"):
        logger.info("endpoint http://localhost:%s%s", args.port, path)

    uvicorn.run("landing_api.main:app", host=args.host, port=args.port, reload=args.reload, log_config=None)


if __name__ == "__main__":
    main()
