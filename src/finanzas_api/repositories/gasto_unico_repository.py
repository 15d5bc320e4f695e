"""Repository para Gastos Únicos."""

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from finanzas_api.models.enums import TipoOrigen
from finanzas_api.models.gasto import Gasto
from finanzas_api.models.gasto_unico import GastoUnico
from finanzas_api.repositories.base import BaseRepository


class GastoUnicoRepository(BaseRepository[GastoUnico]):
    """Repositorio de gastos únicos."""

    def __init__(self, db: Session) -> None:
        super().__init__(GastoUnico, db)

    def find_sin_gasto(self) -> list[GastoUnico]:
        """Gastos únicos que todavía no tienen su Gasto vinculado."""
        stmt = (
            select(GastoUnico)
            .outerjoin(
                Gasto,
                and_(
                    Gasto.tipo_origen == TipoOrigen.GASTO_UNICO.value,
                    Gasto.id_origen == GastoUnico.id,
                ),
            )
            .where(Gasto.id.is_(None))
            .order_by(GastoUnico.id)
        )
        return list(self.db.execute(stmt).scalars().all())
