"""Repository de solo lectura para los catálogos."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from finanzas_api.models.catalogos import CategoriaGasto, ImportanciaGasto, Tarjeta, TipoPago


class CatalogoRepository:
    """
    Acceso a los catálogos que referencian gastos, gastos únicos y compras.

    Example:
        >>> repo = CatalogoRepository(db)
        >>> repo.missing_ids({"categoria_gasto_id": 2, "tipo_pago_id": 99})
        [("tipo_pago_id", 99)]
    """

    # campo de la entidad -> (modelo, nombre visible)
    REFERENCIAS: dict[str, tuple[type[Any], str]] = {
        "categoria_gasto_id": (CategoriaGasto, "Categoría"),
        "importancia_gasto_id": (ImportanciaGasto, "Importancia"),
        "tipo_pago_id": (TipoPago, "Tipo de pago"),
        "tarjeta_id": (Tarjeta, "Tarjeta"),
    }

    def __init__(self, db: Session) -> None:
        self.db = db

    def missing_ids(self, values: dict[str, Any]) -> list[tuple[str, int]]:
        """
        Devuelve los ids de catálogo que no existen.

        Los campos ausentes o en None se ignoran.
        """
        faltantes: list[tuple[str, int]] = []
        for field, (model, _) in self.REFERENCIAS.items():
            value = values.get(field)
            if value is None:
                continue
            if self.db.get(model, value) is None:
                faltantes.append((field, value))
        return faltantes

    def nombre_de(self, field: str) -> str:
        return self.REFERENCIAS[field][1]

    def get_tarjeta(self, tarjeta_id: int) -> Tarjeta | None:
        return self.db.get(Tarjeta, tarjeta_id)

    def nombres(self, model: type[Any], column: str) -> dict[int, str]:
        """Mapa id -> nombre de un catálogo, para armar resúmenes."""
        stmt = select(model.id, getattr(model, column))
        return {row_id: nombre for row_id, nombre in self.db.execute(stmt).all()}
