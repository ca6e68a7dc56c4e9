#!/usr/bin/env python3
"""
HTTP Server - Hexagonal Architecture

JSON endpoints for locating a CUSIP's pricing supplement, fetching its
HTML, and extracting note terms.

Run with: uvicorn note_analyzer.server_http:app --host 127.0.0.1 --port 3000

Configuration: see note_analyzer.config (SEC_API_KEY, OPENAI_API_KEY,
SEC_USER_AGENT, LOCATOR_BACKEND, PORT, LOG_LEVEL, ...)
"""

import logging
import signal
from datetime import datetime, timezone
from typing import Optional

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .adapters.http import HTTPHandlers
from .config import Settings, load_settings
from .container import Container

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y/%m/%d %H:%M:%S"


class MillisecondFormatter(logging.Formatter):
    """Custom formatter with milliseconds as :XXXX format"""
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Override formatTime to include milliseconds with : separator"""
        ct = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            s = ct.strftime(datefmt)
            ms = int((record.created % 1) * 10000)
            return f"{s}:{ms:04d}"
        return super().formatTime(record, datefmt)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with millisecond precision"""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in logging.root.handlers:
        handler.setFormatter(MillisecondFormatter(LOG_FORMAT, datefmt=LOG_DATEFMT))


logger = logging.getLogger(__name__)


def _param(request: Request, name: str) -> Optional[str]:
    return request.query_params.get(name)


def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> Starlette:
    """Build the ASGI app around a container"""
    if container is None:
        container = Container(settings or load_settings())
    handlers = HTTPHandlers(container)

    async def handle_ping(request: Request) -> Response:
        """Health check endpoint"""
        return JSONResponse({"status": "ok"})

    async def handle_analyze_cusip(request: Request) -> Response:
        logger.info(f"analyze-cusip: {dict(request.query_params)}")
        status, body = await handlers.analyze_cusip(_param(request, "cusip"))
        return JSONResponse(body, status_code=status)

    async def handle_filing_html(request: Request) -> Response:
        logger.info(f"filing-html: {dict(request.query_params)}")
        status, body = await handlers.filing_html(
            accession_number=_param(request, "accessionNo"),
            cik=_param(request, "cik")
        )
        return JSONResponse(body, status_code=status)

    async def handle_parse_filing(request: Request) -> Response:
        logger.info(f"parse-filing: {dict(request.query_params)}")
        status, body = await handlers.parse_filing(
            cusip=_param(request, "cusip"),
            accession_number=_param(request, "accessionNo"),
            cik=_param(request, "cik")
        )
        return JSONResponse(body, status_code=status)

    routes = [
        Route("/ping", handle_ping),
        Route("/api/analyze-cusip", handle_analyze_cusip, methods=["GET"]),
        Route("/api/filing-html", handle_filing_html, methods=["GET"]),
        Route("/api/parse-filing", handle_parse_filing, methods=["GET"]),
    ]

    return Starlette(routes=routes)


settings = load_settings()
configure_logging(settings.log_level)

app = create_app(settings)


# Graceful shutdown on SIGTERM
def handle_sigterm(signum, frame):
    logger.info("Received SIGTERM, shutting down gracefully...")
    import sys
    sys.exit(0)


def main() -> None:
    import uvicorn
    signal.signal(signal.SIGTERM, handle_sigterm)
    logger.info(f"Starting HTTP server on port {settings.port} (locator: {settings.locator_backend})")
    uvicorn.run(app, host="127.0.0.1", port=settings.port)


if __name__ == "__main__":
    main()
