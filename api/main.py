"""FastAPI application configuration.

Main entry point for the Pwned Range Check HTTP server.
Serves the JSON breach check endpoints plus a static web client, with
security headers, restrictive CORS and inbound rate limiting.
"""

import argparse
import logging
import os
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from api.routes import check_router, health_router
from core.config import (
    PWNED_RANGE_URL,
    STATIC_DIR,
    UPSTREAM_ERROR_STATUS,
    RATE_LIMIT,
    CORS_ORIGINS,
    DEFAULT_HOST,
    DEFAULT_PORT,
)
from core.siem import configure_logging


logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map request body validation failures to 400.

    Field validator messages are passed through; anything else (bad JSON,
    wrong types, missing body) is reported as an invalid body.
    """
    detail = "Invalid request body"
    for error in exc.errors():
        if error.get("type") == "value_error":
            ctx_error = (error.get("ctx") or {}).get("error")
            if ctx_error is not None:
                detail = str(ctx_error)
            else:
                detail = error.get("msg", detail).removeprefix("Value error, ")
            break
    return JSONResponse(status_code=400, content={"detail": detail})


async def add_security_headers(request: Request, call_next) -> Response:
    """Add security headers to all responses.

    Headers follow OWASP security recommendations:
    - X-Content-Type-Options: Prevents MIME-type sniffing
    - X-Frame-Options: Prevents clickjacking attacks
    - Content-Security-Policy: Restricts resource loading
    - Referrer-Policy: Controls referrer information leakage
    - Cache-Control: Lookup results must not be cached by intermediaries
    """
    response = await call_next(request)

    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Content-Security-Policy"] = "default-src 'self'; frame-ancestors 'none'"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

    if request.url.path.startswith("/api/"):
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, private"
        response.headers["Pragma"] = "no-cache"

    return response


def create_app(
    static_dir: Optional[str] = None,
    range_url: Optional[str] = None,
    upstream_error_status: Optional[int] = None,
    rate_limit: Optional[str] = None,
) -> FastAPI:
    """Build a configured application instance.

    Args:
        static_dir: Directory served at "/", defaults to STATIC_DIR
        range_url: Range API base URL, defaults to PWNED_RANGE_URL
        upstream_error_status: Status used when the range lookup fails
        rate_limit: slowapi limit string applied per client IP

    Returns:
        FastAPI application with its own router, middleware and limiter
    """
    configure_logging()
    static_dir = STATIC_DIR if static_dir is None else static_dir

    app = FastAPI(
        title="Pwned Range Check API",
        description="""
        Check passwords against known data breaches using k-Anonymity:
        - SHA-1 hashing done server-side or by the client
        - Only the 5-character hash prefix leaves this server
        - Suffix matched locally against the returned candidates
        """,
        version="1.0.0",
    )

    app.state.range_url = range_url or PWNED_RANGE_URL
    app.state.upstream_error_status = upstream_error_status or UPSTREAM_ERROR_STATUS

    # Rate limiter configuration
    # Uses client IP for rate limit tracking
    limiter = Limiter(key_func=get_remote_address, default_limits=[rate_limit or RATE_LIMIT])
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(SlowAPIMiddleware)
    app.middleware("http")(add_security_headers)

    # CORS configuration - explicitly restricted
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Register routers before the static mount so they take precedence
    app.include_router(check_router)
    app.include_router(health_router)

    if os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning("Static directory %s not found, web client disabled", static_dir)

    return app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pwned-server",
        description="HTTP server for k-Anonymity password breach checks.",
    )
    parser.add_argument("-port", "--port", type=int, default=DEFAULT_PORT, help="Port to listen on")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Interface to bind")
    parser.add_argument("--static-dir", default=STATIC_DIR, help="Directory of static files served at /")
    parser.add_argument("--range-url", default=None, help="Override the range API base URL")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Parse flags and serve until interrupted."""
    import uvicorn

    args = build_parser().parse_args(argv)

    application = create_app(static_dir=args.static_dir, range_url=args.range_url)
    logger.info("Server starting on %s:%d", args.host, args.port)
    uvicorn.run(application, host=args.host, port=args.port)


app = create_app()


if __name__ == "__main__":
    main()
