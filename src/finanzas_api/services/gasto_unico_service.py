"""
Servicio de Gastos Únicos.

Un gasto único siempre vive junto a su Gasto vinculado: se crean, se
actualizan y se eliminan en la misma transacción.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from finanzas_api.api.errors import NotFoundError
from finanzas_api.api.schemas.gasto_unico import GastoUnicoCreate, GastoUnicoUpdate
from finanzas_api.core.database import transaction
from finanzas_api.core.logging import get_logger
from finanzas_api.core.pagination import FilterBuilder, Page, PageRequest
from finanzas_api.models.enums import TipoOrigen
from finanzas_api.models.gasto import Gasto
from finanzas_api.models.gasto_unico import GastoUnico
from finanzas_api.repositories.gasto_repository import GastoRepository
from finanzas_api.repositories.gasto_unico_repository import GastoUnicoRepository
from finanzas_api.services.catalogos import validar_catalogos
from finanzas_api.services.expense_strategies import ImmediateExpenseStrategy


logger = get_logger(__name__)


class GastoUnicoService:
    """
    Servicio para gastos únicos.

    Maneja la lógica de negocio para:
    - Crear el gasto único y su Gasto de forma atómica
    - Propagar cambios al Gasto vinculado
    - Eliminar ambos registros juntos
    """

    def __init__(self, db: Session) -> None:
        """Inicializa el servicio con la sesión de base de datos."""
        self.db = db
        self.repo = GastoUnicoRepository(db)
        self.gastos = GastoRepository(db)
        self.strategy = ImmediateExpenseStrategy(db)

    # =========================================================================
    # Consultas
    # =========================================================================

    def search(
        self,
        page_request: PageRequest,
        *,
        categoria_gasto_id: int | None = None,
        importancia_gasto_id: int | None = None,
        tipo_pago_id: int | None = None,
        tarjeta_id: int | None = None,
        procesado: bool | None = None,
        fecha_desde: date | None = None,
        fecha_hasta: date | None = None,
        monto_min: Decimal | None = None,
        monto_max: Decimal | None = None,
    ) -> Page[GastoUnico]:
        """Lista gastos únicos filtrados, del más nuevo al más viejo."""
        conditions = (
            FilterBuilder(GastoUnico)
            .equals_many(
                categoria_gasto_id=categoria_gasto_id,
                importancia_gasto_id=importancia_gasto_id,
                tipo_pago_id=tipo_pago_id,
                tarjeta_id=tarjeta_id,
            )
            .boolean("procesado", procesado)
            .date_range("fecha", fecha_desde, fecha_hasta)
            .number_range("monto", monto_min, monto_max)
            .build()
        )
        return self.repo.find(conditions, page_request)

    def get(self, gasto_unico_id: int) -> GastoUnico:
        """
        Obtiene un gasto único.

        Raises:
            NotFoundError: Si no existe
        """
        gasto_unico = self.repo.get(gasto_unico_id)
        if gasto_unico is None:
            raise NotFoundError("Gasto único", gasto_unico_id)
        return gasto_unico

    def get_gasto_vinculado(self, gasto_unico_id: int) -> Gasto | None:
        gastos = self.gastos.find_by_origen(TipoOrigen.GASTO_UNICO, gasto_unico_id)
        return gastos[0] if gastos else None

    # =========================================================================
    # Escritura
    # =========================================================================

    def create_with_gasto(self, data: GastoUnicoCreate) -> tuple[GastoUnico, Gasto]:
        """
        Crea el gasto único y su Gasto vinculado en una sola transacción.

        Si falla cualquiera de las dos escrituras no queda ninguna.

        Args:
            data: Payload validado

        Returns:
            Tupla (gasto_unico, gasto)

        Raises:
            ValidationError: Si algún id de catálogo no existe
        """
        payload = data.model_dump()
        validar_catalogos(self.db, payload)

        with transaction(self.db):
            gasto_unico = self.repo.create(payload)
            (gasto,) = self.strategy.generate(gasto_unico)

        logger.info(f"Gasto único {gasto_unico.id} creado con gasto {gasto.id}")
        return gasto_unico, gasto

    def update(self, gasto_unico_id: int, data: GastoUnicoUpdate) -> GastoUnico:
        """
        Actualiza el gasto único y sincroniza su Gasto vinculado.

        Si el Gasto vinculado no existe (por ejemplo, fue borrado a mano) se
        vuelve a crear.
        """
        gasto_unico = self.get(gasto_unico_id)
        cambios = data.cambios()
        validar_catalogos(self.db, cambios)

        with transaction(self.db):
            self.repo.update(gasto_unico, cambios)
            gasto = self.get_gasto_vinculado(gasto_unico.id)
            if gasto is None:
                self.strategy.generate(gasto_unico)
            else:
                self.strategy.sync(gasto_unico, gasto)

        logger.info(f"Gasto único {gasto_unico.id} actualizado: {sorted(cambios)}")
        return gasto_unico

    def delete(self, gasto_unico_id: int) -> None:
        """
        Elimina el gasto único y su Gasto vinculado.

        Raises:
            NotFoundError: Si no existe (también en borrados repetidos)
        """
        gasto_unico = self.get(gasto_unico_id)

        with transaction(self.db):
            eliminados = self.gastos.delete_by_origen(TipoOrigen.GASTO_UNICO, gasto_unico.id)
            self.repo.delete(gasto_unico)

        logger.info(f"Gasto único {gasto_unico_id} eliminado ({eliminados} gasto(s) vinculados)")
