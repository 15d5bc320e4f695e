"""
Manejo centralizado de errores para FastAPI.

Define excepciones personalizadas y handlers que responden siempre con el
envelope de error: ``{success: false, data: null, meta: {}, error, code, ...}``.
"""

from datetime import UTC, datetime
from typing import Any, cast

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ExceptionHandler

from finanzas_api.core.logging import get_logger


logger = get_logger(__name__)


# =============================================================================
# Excepciones Personalizadas
# =============================================================================


class AppException(Exception):
    """
    Excepción base de la aplicación.

    Todas las excepciones personalizadas heredan de esta clase.
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(AppException):
    """Recurso no encontrado."""

    def __init__(
        self,
        resource: str,
        resource_id: str | int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"{resource} no encontrado"
        if resource_id is not None:
            message = f"{resource} con ID '{resource_id}' no encontrado"

        code_name = (
            resource.upper()
            .replace(" ", "_")
            .replace("Ú", "U")
            .replace("Á", "A")
            .replace("É", "E")
        )
        super().__init__(
            message=message,
            code=f"{code_name}_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
        )


class ValidationError(AppException):
    """Error de validación de datos."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        code = "VALIDATION_ERROR"
        if field:
            code = f"INVALID_{field.upper()}"

        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class ConflictError(AppException):
    """Conflicto de datos (duplicado, etc)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
        )


class ProxyForwardError(AppException):
    """
    Falla al reenviar una llamada desde el proxy MCP hacia la API.

    Conserva el status del downstream cuando existe; si la API no respondió
    se usa 502.
    """

    def __init__(
        self,
        message: str,
        downstream_status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=f"Error ejecutando API call: {message}",
            code="PROXY_FORWARD_ERROR",
            status_code=downstream_status or status.HTTP_502_BAD_GATEWAY,
            details=details,
        )


# =============================================================================
# Modelo de Respuesta de Error
# =============================================================================


class ErrorResponse(BaseModel):
    """Envelope de error estandarizado."""

    success: bool = False
    data: None = None
    meta: dict[str, Any] = {}
    error: str
    code: str
    details: dict[str, Any] = {}
    path: str | None = None
    timestamp: str | None = None


def _error_body(
    request: Request,
    error: str,
    code: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return ErrorResponse(
        error=error,
        code=code,
        details=details or {},
        path=request.url.path,
        timestamp=datetime.now(UTC).isoformat(),
    ).model_dump()


# =============================================================================
# Exception Handlers
# =============================================================================


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler para excepciones de la aplicación."""
    logger.warning(
        f"AppException: {exc.code} - {exc.message}",
        extra={"path": request.url.path, "code": exc.code},
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.message, exc.code, exc.details),
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handler para HTTPException estándar (incluye 404/405 de routing)."""
    if isinstance(exc.detail, dict):
        error = exc.detail.get("error", str(exc.detail))
        code = exc.detail.get("code", f"HTTP_{exc.status_code}")
        details: dict[str, Any] = {
            k: str(v) for k, v in exc.detail.items() if k not in ("error", "code")
        }
    else:
        error = str(exc.detail)
        code = f"HTTP_{exc.status_code}"
        details = {}

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, error, code, details),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handler para errores de validación de Pydantic (body, query y path)."""
    errors = exc.errors()
    formatted_errors = []

    for error in errors:
        loc = ".".join(str(x) for x in error["loc"])
        formatted_errors.append(
            {
                "field": loc,
                "message": error["msg"],
                "type": error["type"],
            }
        )

    logger.warning(
        f"Validation error: {len(errors)} errors",
        extra={"path": request.url.path, "errors": formatted_errors},
    )

    campos = ", ".join(e["field"] for e in formatted_errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            request,
            f"Error de validación: {campos}" if campos else "Error de validación",
            "VALIDATION_ERROR",
            {"errors": formatted_errors},
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no manejadas.

    En producción no expone detalles internos.
    """
    from finanzas_api.config.settings import settings

    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {exc}",
        extra={"path": request.url.path},
        exc_info=True,
    )

    details: dict[str, Any] = {}
    if not settings.is_production():
        details = {"type": type(exc).__name__, "message": str(exc)}

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(request, "Error interno del servidor", "INTERNAL_ERROR", details),
    )


# =============================================================================
# Registrar Handlers
# =============================================================================


def setup_exception_handlers(app: FastAPI) -> None:
    """Registra todos los exception handlers en la app FastAPI."""
    app.add_exception_handler(AppException, cast(ExceptionHandler, app_exception_handler))
    app.add_exception_handler(
        StarletteHTTPException, cast(ExceptionHandler, http_exception_handler)
    )
    app.add_exception_handler(HTTPException, cast(ExceptionHandler, http_exception_handler))
    app.add_exception_handler(
        RequestValidationError, cast(ExceptionHandler, validation_exception_handler)
    )
    app.add_exception_handler(Exception, cast(ExceptionHandler, unhandled_exception_handler))
