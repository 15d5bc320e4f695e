"""Repository para Compras."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from finanzas_api.models.compra import Compra
from finanzas_api.repositories.base import BaseRepository


class CompraRepository(BaseRepository[Compra]):
    """Repositorio de compras en cuotas."""

    def __init__(self, db: Session) -> None:
        super().__init__(Compra, db)

    def find_pendientes(self) -> list[Compra]:
        """Compras que todavía tienen cuotas por generar, de la más antigua a la más nueva."""
        stmt = (
            select(Compra)
            .where(Compra.pendiente_cuotas.is_(True))
            .order_by(Compra.fecha_compra, Compra.id)
        )
        return list(self.db.execute(stmt).scalars().all())
