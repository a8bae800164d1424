"""
Application factory - builds FastAPI app with all middleware and routes.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from pdfhelper import __version__
from pdfhelper.config import Settings, get_settings, init_settings
from pdfhelper.modules.generate import router as generate_router
from pdfhelper.modules.preview import router as preview_router
from pdfhelper.shared.errors import PdfHelperError
from pdfhelper.shared.ids import generate_request_id
from pdfhelper.shared.logging import (
    clear_request_context,
    get_logger,
    set_request_context,
    setup_logging,
)
from pdfhelper.shared.types import RequestContext

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()

    setup_logging(settings.log_level)
    logger.info("Starting PdfHelper...")

    settings.save_path.mkdir(parents=True, exist_ok=True)
    logger.info(f"Output directory: {settings.save_path.resolve()}")
    logger.info(f"Paper: {settings.paper_size}, max bulk: {settings.max_generate_bulk}")

    yield

    logger.info("PdfHelper stopped")


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than ``max_body_bytes`` with 413.

    A declared Content-Length is checked up front; chunked bodies are
    counted as they are read.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    def _too_large(self) -> StarletteHTTPException:
        return StarletteHTTPException(
            status_code=413,
            detail=f"Request body exceeds {self.max_body_bytes} bytes",
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_bytes:
            exc = self._too_large()
            response = JSONResponse(status_code=exc.status_code, content={"message": exc.detail})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    raise self._too_large()
            return message

        await self.app(scope, limited_receive, send)


def _request_id(request: Request) -> str | None:
    ctx = getattr(request.state, "context", None)
    return ctx.request_id if ctx else None


def build_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()
    else:
        init_settings(settings)

    app = FastAPI(
        title="PdfHelper",
        description="HTML to PDF generation service backed by headless Chromium",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next: Any) -> Response:
        """Attach request context for logging and tracing."""
        ctx = RequestContext(
            request_id=request.headers.get("X-Request-ID", generate_request_id()),
        )
        request.state.context = ctx
        set_request_context(ctx)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = ctx.request_id
            return response
        finally:
            clear_request_context()

    @app.exception_handler(PdfHelperError)
    async def pdfhelper_error_handler(request: Request, exc: PdfHelperError) -> JSONResponse:
        """Handle PdfHelperError with consistent JSON response."""
        if exc.http_status >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=exc.http_status,
            content={**exc.to_dict(), "request_id": _request_id(request)},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "message": "Invalid request body",
                "code": "VALIDATION_ERROR",
                "request_id": _request_id(request),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"message": "Internal server error", "error": str(exc)},
        )

    app.include_router(generate_router)
    app.include_router(preview_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        return {
            "message": f"Welcome to PdfHelper v{__version__}",
            "documentationUrl": "/docs",
        }

    return app
