"""
Filtros y paginación inteligente para listados.

Reglas:
- Los filtros son conjuntivos: todos los predicados deben cumplirse.
- Sin ``limit`` se retorna la colección filtrada completa y la metadata de
  paginación es ``None``.
- Con ``limit`` se retornan como máximo ``limit`` items a partir de ``offset``.
- El orden siempre termina en ``id`` para que los cortes por offset sean
  deterministas entre llamadas.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.orm import Session

from finanzas_api.api.errors import ValidationError


T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Parámetros de paginación pedidos por el cliente."""

    limit: int | None = None
    offset: int = 0

    @property
    def is_paginated(self) -> bool:
        return self.limit is not None


@dataclass
class Page(Generic[T]):
    """Resultado de una consulta paginada."""

    items: list[T]
    total: int
    limit: int | None = None
    offset: int = 0

    @property
    def has_prev(self) -> bool:
        return self.offset > 0

    @property
    def has_next(self) -> bool:
        if self.limit is None:
            return False
        return self.offset + self.limit < self.total

    def pagination_meta(self) -> dict[str, Any] | None:
        """Metadata de paginación, solo si el cliente envió ``limit``."""
        if self.limit is None:
            return None
        return {
            "limit": self.limit,
            "offset": self.offset,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


class FilterBuilder:
    """
    Construye predicados SQLAlchemy de forma encadenable.

    Los valores ``None`` se ignoran, así los parámetros opcionales de query
    se pueden pasar tal cual.

    Example:
        >>> condiciones = (
        ...     FilterBuilder(GastoUnico)
        ...     .equals("categoria_gasto_id", 2)
        ...     .date_range("fecha", date(2025, 1, 1), None)
        ...     .build()
        ... )
    """

    def __init__(self, model: type[Any]) -> None:
        self.model = model
        self._conditions: list[ColumnElement[bool]] = []

    def _column(self, field: str) -> Any:
        return getattr(self.model, field)

    def equals(self, field: str, value: Any) -> "FilterBuilder":
        if value is not None and value != "":
            self._conditions.append(self._column(field) == value)
        return self

    def equals_many(self, **filters: Any) -> "FilterBuilder":
        for field, value in filters.items():
            self.equals(field, value)
        return self

    def boolean(self, field: str, value: bool | None) -> "FilterBuilder":
        if value is not None:
            self._conditions.append(self._column(field).is_(value))
        return self

    def date_range(self, field: str, desde: date | None, hasta: date | None) -> "FilterBuilder":
        """Rango inclusivo sobre un campo de fecha."""
        if desde is not None and hasta is not None and hasta < desde:
            raise ValidationError(
                "fecha_hasta no puede ser anterior a fecha_desde",
                field="fecha_hasta",
            )
        if desde is not None:
            self._conditions.append(self._column(field) >= desde)
        if hasta is not None:
            self._conditions.append(self._column(field) <= hasta)
        return self

    def number_range(
        self,
        field: str,
        minimo: Decimal | None,
        maximo: Decimal | None,
    ) -> "FilterBuilder":
        """Rango numérico inclusivo."""
        if minimo is not None and maximo is not None and maximo < minimo:
            raise ValidationError(
                f"El máximo de {field} no puede ser menor que el mínimo",
                field=field,
            )
        if minimo is not None:
            self._conditions.append(self._column(field) >= minimo)
        if maximo is not None:
            self._conditions.append(self._column(field) <= maximo)
        return self

    def build(self) -> list[ColumnElement[bool]]:
        return list(self._conditions)


def paginate(
    session: Session,
    model: type[Any],
    conditions: list[ColumnElement[bool]],
    page_request: PageRequest,
    order_by: list[Any] | None = None,
) -> Page[Any]:
    """
    Ejecuta una consulta filtrada con paginación opcional.

    Args:
        session: Sesión de base de datos
        model: Modelo a consultar
        conditions: Predicados (AND) generados por FilterBuilder
        page_request: limit/offset pedidos
        order_by: Columnas de orden; ``model.id`` desc se agrega como desempate

    Returns:
        Page con los items y el total filtrado
    """
    stmt: Select[Any] = select(model).where(*conditions)

    total = session.execute(
        select(func.count()).select_from(model).where(*conditions)
    ).scalar_one()

    ordering = list(order_by or [])
    ordering.append(model.id.desc())
    stmt = stmt.order_by(*ordering)

    if page_request.is_paginated:
        stmt = stmt.offset(page_request.offset).limit(page_request.limit)

    items = list(session.execute(stmt).scalars().all())

    return Page(
        items=items,
        total=total,
        limit=page_request.limit,
        offset=page_request.offset,
    )


__all__ = ["FilterBuilder", "Page", "PageRequest", "paginate"]
