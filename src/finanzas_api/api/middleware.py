"""
Middlewares HTTP compartidos por la API de finanzas y el servidor MCP.

- Correlation ID para seguir un request entre el proxy MCP y la API
- Logging estructurado de cada request con su duración
"""

from collections.abc import Callable
from contextvars import ContextVar
import time
from typing import Any
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware


CORRELATION_HEADER = "X-Correlation-ID"

# Context variable para correlation ID
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Obtiene el correlation ID del contexto actual."""
    return correlation_id_var.get()


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Genera o propaga el Correlation ID.

    - Si viene X-Correlation-ID en el request, lo usa
    - Si no, genera uno nuevo
    - Lo devuelve en el response
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Any],
    ) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex[:8]
        correlation_id_var.set(correlation_id)

        with logger.contextualize(correlation_id=correlation_id):
            response = await call_next(request)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logging de requests: método, path, status y duración.

    Los health checks y la documentación no se loggean.
    """

    EXCLUDE_PATHS = {"/", "/health", "/mcp/health", "/docs", "/openapi.json"}

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Any],
    ) -> Response:
        if request.url.path in self.EXCLUDE_PATHS:
            return await call_next(request)

        method = request.method
        path = request.url.path
        query = str(request.query_params) if request.query_params else ""
        correlation_id = get_correlation_id()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"{method} {path} - ERROR ({duration_ms:.2f}ms): {e!s}",
                extra={
                    "event": "request_error",
                    "method": method,
                    "path": path,
                    "query": query,
                    "duration_ms": round(duration_ms, 2),
                    "correlation_id": correlation_id,
                },
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log_level = "info" if response.status_code < 400 else "warning"
        getattr(logger, log_level)(
            f"{method} {path} - {response.status_code} ({duration_ms:.2f}ms)",
            extra={
                "event": "request_complete",
                "method": method,
                "path": path,
                "query": query,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "correlation_id": correlation_id,
            },
        )
        return response


def setup_middlewares(app: Any) -> None:
    """
    Registra los middlewares.

    Starlette ejecuta primero el último agregado, así que CorrelationIdMiddleware
    va al final para que el ID exista cuando loggea RequestLoggingMiddleware.
    """
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
