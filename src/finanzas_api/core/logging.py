"""
Configuración centralizada de logging usando Loguru.

Consola colorizada en desarrollo, JSON estructurado en producción y,
opcionalmente, archivos con rotación para auditoría.
"""

import json
from pathlib import Path
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger


if TYPE_CHECKING:
    from loguru import Logger

from finanzas_api.config.settings import settings


# Nombre del servicio para observability
SERVICE_NAME = "finanzas-api"


def json_serializer(record: dict[str, Any]) -> str:
    """Serializa un record de log a JSON para producción."""
    subset = {
        "ts": record["time"].strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        "level": record["level"].name,
        "service": SERVICE_NAME,
        "msg": record["message"],
        "module": record["name"],
        "function": record["function"],
        "line": record["line"],
    }

    if record.get("extra"):
        extra = record["extra"].copy()
        if "correlation_id" in extra:
            extra["trace_id"] = extra.pop("correlation_id")
        subset.update(extra)

    if record["exception"]:
        subset["error"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else None,
            "message": str(record["exception"].value) if record["exception"].value else None,
        }

    return json.dumps(subset, default=str)


def json_sink(message: Any) -> None:
    """Sink que escribe JSON a stderr (stdout lo usa el transporte stdio de MCP)."""
    record = message.record
    print(json_serializer(record), file=sys.stderr, flush=True)  # noqa: T201


def setup_logging() -> None:
    """
    Configura el sistema de logging de la aplicación.

    - Development/testing: formato colorizado legible
    - Production: JSON estructurado
    - Archivos con rotación si log_to_file está activo
    """
    logger.remove()

    if settings.is_production():
        logger.add(
            json_sink,
            level=settings.log_level,
            backtrace=False,
            diagnose=False,
        )
    else:
        console_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
        logger.add(
            sys.stderr,
            format=console_format,
            level=settings.log_level,
            colorize=True,
            backtrace=True,
            diagnose=settings.is_development(),
        )

    if settings.log_to_file:
        logs_dir = Path(settings.logs_directory)
        logs_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            logs_dir / "finanzas_api_{time:YYYY-MM-DD}.log",
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{process} | "
                "{name}:{function}:{line} | "
                "{message}"
            ),
            level=settings.log_level,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            compression="zip",
            encoding="utf-8",
        )

        logger.add(
            logs_dir / "errors_{time:YYYY-MM-DD}.log",
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{name}:{function}:{line} | "
                "{message}\n"
                "{exception}"
            ),
            level="ERROR",
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            compression="zip",
            encoding="utf-8",
        )

        # Movimientos de dinero (gastos escritos) para auditoría
        logger.add(
            logs_dir / "movimientos_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {message}",
            level="INFO",
            rotation=settings.log_rotation,
            retention="6 months",
            compression="zip",
            encoding="utf-8",
            filter=lambda record: "movement" in record["extra"],
        )

    logger.debug(
        f"Sistema de logging configurado - Nivel: {settings.log_level} - "
        f"Entorno: {settings.environment}"
    )


def get_logger(name: str) -> "Logger":
    """
    Obtiene un logger con el nombre especificado.

    Example:
        >>> from finanzas_api.core.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Mensaje de log")
    """
    return logger.bind(name=name)


def log_movement(tipo_origen: str, monto: Any, descripcion: str, gasto_id: int | None = None) -> None:
    """
    Registra un gasto escrito en el log de movimientos.

    Example:
        >>> log_movement("gasto_unico", Decimal("2500.50"), "Supermercado", gasto_id=12)
    """
    logger.bind(movement=True).info(
        f"[{tipo_origen.upper()}] gasto={gasto_id} - {float(monto):,.2f} - {descripcion}"
    )


# Configurar logging al importar el módulo
setup_logging()

__all__ = ["logger", "get_logger", "log_movement", "setup_logging"]
