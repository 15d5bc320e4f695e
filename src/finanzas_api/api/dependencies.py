"""Dependencias compartidas para FastAPI."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from finanzas_api.api.errors import ValidationError
from finanzas_api.config.settings import settings
from finanzas_api.core.database import get_session
from finanzas_api.core.pagination import PageRequest


# =============================================================================
# DATABASE
# =============================================================================


def get_db() -> Generator[Session, None, None]:
    """Dependency para obtener sesión de base de datos."""
    with get_session() as session:
        yield session


# Type alias para inyección de dependencias
DBSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# PAGINACIÓN
# =============================================================================


def get_page_request(
    limit: int | None = Query(None, description="Máximo de items; sin limit se devuelve todo"),
    offset: int = Query(0, description="Items a saltar (solo con limit)"),
) -> PageRequest:
    """
    Parámetros de paginación inteligente.

    Raises:
        ValidationError: Si limit está fuera de 1..max_page_size u offset es negativo
    """
    if limit is not None and not 1 <= limit <= settings.max_page_size:
        raise ValidationError(
            f"limit debe estar entre 1 y {settings.max_page_size}",
            field="limit",
        )
    if offset < 0:
        raise ValidationError("offset no puede ser negativo", field="offset")
    return PageRequest(limit=limit, offset=offset)


Pagination = Annotated[PageRequest, Depends(get_page_request)]
