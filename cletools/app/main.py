from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from cletools.app.api.cletools import router as cletools_router
from cletools.app.api.health import VERSION
from cletools.app.api.health import router as health_router
from cletools.app.config.settings import settings
from cletools.app.config.tool_properties import reload_tool_registry
from cletools.app.core.logging import request_id_var, setup_logging
from cletools.app.domain.tools.registry import ToolRegistry
from cletools.app.security.cors import cors_kwargs

setup_logging(
    level=settings.log_level,
    json_output=settings.log_json,
    log_file=settings.log_file or None,
)
logger = logging.getLogger("cletools")


def _request_context(request: Request) -> dict:
    return {
        "method": request.method,
        "path": request.url.path,
        "query": request.url.query,
        "client_ip": request.client.host if request.client else None,
    }


app = FastAPI(title="CLE Tools Service", version=VERSION)
app.state.tool_registry = ToolRegistry()


@app.on_event("startup")
def startup_event():
    """Load the CLE tool registry from the configured property sources."""
    reload_tool_registry(app.state.tool_registry, settings)


if settings.cors_origins_list:
    app.add_middleware(CORSMiddleware, **cors_kwargs(settings.cors_origins_list))


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "no-referrer"
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.include_router(health_router)
app.include_router(cletools_router)


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            request_id_var.reset(token)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        latency = time.time() - start_time
        route = getattr(request.scope.get("route"), "path", request.url.path)

        logger.info(
            "Request completed",
            extra={
                "request_id": getattr(request.state, "request_id", "unknown"),
                "method": request.method,
                "route": route,
                "status": response.status_code,
                "latency_ms": round(latency * 1000, 2),
            },
        )

        return response


app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    request_id = getattr(request.state, "request_id", "unknown")
    detail = exc.detail if isinstance(exc.detail, dict) else {"code": "HTTP_ERROR", "message": str(exc.detail)}
    logger.warning(
        "HTTPException",
        extra={
            "request_id": request_id,
            "status_code": exc.status_code,
            "error_code": detail.get("code"),
            "error_message": detail.get("message"),
            **_request_context(request),
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "code": detail.get("code", "HTTP_ERROR"),
            "message": detail.get("message", "Request failed"),
            "request_id": request_id,
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", "unknown")
    logger.error(
        "Unhandled exception",
        extra={"request_id": request_id, **_request_context(request)},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An internal error occurred",
            "request_id": request_id,
        },
    )
