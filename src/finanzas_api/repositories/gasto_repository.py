"""Repository para Gastos."""

from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from finanzas_api.models.enums import TipoOrigen
from finanzas_api.models.gasto import Gasto
from finanzas_api.repositories.base import BaseRepository


class GastoRepository(BaseRepository[Gasto]):
    """
    Repositorio de gastos.

    Agrega búsquedas por entidad origen y agregados para el resumen.
    """

    default_order = ("fecha",)

    def __init__(self, db: Session) -> None:
        super().__init__(Gasto, db)

    def find_by_origen(self, tipo_origen: TipoOrigen, id_origen: int) -> list[Gasto]:
        """Gastos generados por una entidad origen, en orden de creación."""
        stmt = (
            select(Gasto)
            .where(Gasto.tipo_origen == tipo_origen.value, Gasto.id_origen == id_origen)
            .order_by(Gasto.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def count_by_origen(self, tipo_origen: TipoOrigen, id_origen: int) -> int:
        stmt = select(func.count(Gasto.id)).where(
            Gasto.tipo_origen == tipo_origen.value,
            Gasto.id_origen == id_origen,
        )
        return self.db.execute(stmt).scalar_one()

    def delete_by_origen(self, tipo_origen: TipoOrigen, id_origen: int) -> int:
        """
        Elimina los gastos de una entidad origen.

        Returns:
            Cantidad de filas eliminadas
        """
        gastos = self.find_by_origen(tipo_origen, id_origen)
        for gasto in gastos:
            self.db.delete(gasto)
        self.db.flush()
        return len(gastos)

    def totales_por(self, field: str, desde: date, hasta: date) -> dict[Any, Decimal]:
        """
        Suma de montos agrupada por una columna en un rango de fechas.

        Args:
            field: Columna de agrupación (ej: "categoria_gasto_id")
            desde: Fecha inicial (inclusive)
            hasta: Fecha final (inclusive)

        Returns:
            Dict {valor de la columna: total}
        """
        column = getattr(Gasto, field)
        stmt = (
            select(column, func.coalesce(func.sum(Gasto.monto), 0))
            .where(Gasto.fecha >= desde, Gasto.fecha <= hasta)
            .group_by(column)
            .order_by(column)
        )
        return {key: Decimal(str(total)) for key, total in self.db.execute(stmt).all()}

    def total_y_cantidad(self, desde: date, hasta: date) -> tuple[Decimal, int]:
        stmt = select(
            func.coalesce(func.sum(Gasto.monto), 0),
            func.count(Gasto.id),
        ).where(Gasto.fecha >= desde, Gasto.fecha <= hasta)
        total, cantidad = self.db.execute(stmt).one()
        return Decimal(str(total)), cantidad
