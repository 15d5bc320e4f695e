"""Servicio de Gastos: consultas, alta manual y resumen por período."""

from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from finanzas_api.api.errors import ConflictError, NotFoundError, ValidationError
from finanzas_api.api.schemas.gasto import (
    GastoCreate,
    GastoSummaryResponse,
    GastoUpdate,
    TotalAgrupado,
)
from finanzas_api.core.database import transaction
from finanzas_api.core.logging import get_logger, log_movement
from finanzas_api.core.pagination import FilterBuilder, Page, PageRequest
from finanzas_api.models.catalogos import CategoriaGasto, ImportanciaGasto, TipoPago
from finanzas_api.models.enums import TipoOrigen
from finanzas_api.models.gasto import Gasto
from finanzas_api.repositories.catalogo_repository import CatalogoRepository
from finanzas_api.repositories.gasto_repository import GastoRepository
from finanzas_api.services.catalogos import validar_catalogos
from finanzas_api.utils.montos import a_centavos


logger = get_logger(__name__)


class GastoService:
    """
    Servicio para gastos.

    Los gastos derivados (de gastos únicos o compras) se consultan igual que
    los manuales, pero solo los manuales se pueden modificar por acá.
    """

    def __init__(self, db: Session) -> None:
        """Inicializa el servicio con la sesión de base de datos."""
        self.db = db
        self.repo = GastoRepository(db)

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
        tipo_origen: TipoOrigen | None = None,
        id_origen: int | None = None,
        fecha_desde: date | None = None,
        fecha_hasta: date | None = None,
        monto_min: Decimal | None = None,
        monto_max: Decimal | None = None,
    ) -> Page[Gasto]:
        """Lista gastos filtrados, ordenados por fecha descendente."""
        conditions = (
            FilterBuilder(Gasto)
            .equals_many(
                categoria_gasto_id=categoria_gasto_id,
                importancia_gasto_id=importancia_gasto_id,
                tipo_pago_id=tipo_pago_id,
                tarjeta_id=tarjeta_id,
                tipo_origen=tipo_origen.value if tipo_origen else None,
                id_origen=id_origen,
            )
            .date_range("fecha", fecha_desde, fecha_hasta)
            .number_range("monto", monto_min, monto_max)
            .build()
        )
        return self.repo.find(conditions, page_request)

    def list_all(self) -> list[Gasto]:
        return self.repo.get_all()

    def get(self, gasto_id: int) -> Gasto:
        """
        Obtiene un gasto.

        Raises:
            NotFoundError: Si no existe
        """
        gasto = self.repo.get(gasto_id)
        if gasto is None:
            raise NotFoundError("Gasto", gasto_id)
        return gasto

    # =========================================================================
    # Escritura
    # =========================================================================

    def create(self, data: GastoCreate) -> Gasto:
        """Crea un gasto manual (sin entidad origen)."""
        payload = data.model_dump()
        validar_catalogos(self.db, payload)

        with transaction(self.db):
            gasto = self.repo.create({**payload, "tipo_origen": TipoOrigen.MANUAL.value})

        log_movement(TipoOrigen.MANUAL.value, gasto.monto, gasto.descripcion, gasto_id=gasto.id)
        return gasto

    def _solo_manual(self, gasto: Gasto, accion: str) -> None:
        if gasto.tipo_origen != TipoOrigen.MANUAL.value:
            raise ConflictError(
                f"No se puede {accion} un gasto generado desde {gasto.tipo_origen}; "
                f"modificá la entidad origen (ID {gasto.id_origen})",
                code="GASTO_DERIVADO",
            )

    def update(self, gasto_id: int, data: GastoUpdate) -> Gasto:
        """
        Actualiza un gasto manual.

        Raises:
            NotFoundError: Si no existe
            ConflictError: Si el gasto fue generado por otra entidad
        """
        gasto = self.get(gasto_id)
        self._solo_manual(gasto, "modificar")
        cambios = data.cambios()
        validar_catalogos(self.db, cambios)

        with transaction(self.db):
            self.repo.update(gasto, cambios)
        return gasto

    def delete(self, gasto_id: int) -> None:
        """
        Elimina un gasto manual.

        Raises:
            NotFoundError: Si no existe
            ConflictError: Si el gasto fue generado por otra entidad
        """
        gasto = self.get(gasto_id)
        self._solo_manual(gasto, "eliminar")

        with transaction(self.db):
            self.repo.delete(gasto)
        logger.info(f"Gasto {gasto_id} eliminado")

    # =========================================================================
    # Resumen
    # =========================================================================

    def summary(
        self,
        fecha_desde: date | None = None,
        fecha_hasta: date | None = None,
        today: date | None = None,
    ) -> GastoSummaryResponse:
        """
        Totales del período agrupados por categoría, importancia, tipo de pago y origen.

        Args:
            fecha_desde: Inicio del período (default: primer día del mes actual)
            fecha_hasta: Fin del período (default: último día del mes actual)
            today: Fecha de referencia para los defaults

        Returns:
            GastoSummaryResponse con totales y porcentajes
        """
        today = today or date.today()
        desde = fecha_desde or today.replace(day=1)
        hasta = fecha_hasta or (today.replace(day=1) + relativedelta(months=1, days=-1))
        if hasta < desde:
            raise ValidationError(
                "fecha_hasta no puede ser anterior a fecha_desde",
                field="fecha_hasta",
            )

        total, cantidad = self.repo.total_y_cantidad(desde, hasta)
        total = a_centavos(total)
        catalogos = CatalogoRepository(self.db)

        def agrupar(field: str, nombres: dict[int, str] | None) -> list[TotalAgrupado]:
            grupos = []
            for key, subtotal in self.repo.totales_por(field, desde, hasta).items():
                subtotal = a_centavos(subtotal)
                nombre = nombres.get(key, str(key)) if nombres is not None else str(key)
                porcentaje = a_centavos(subtotal * 100 / total) if total else Decimal("0.00")
                grupos.append(
                    TotalAgrupado(id=key, nombre=nombre, total=subtotal, porcentaje=porcentaje)
                )
            return sorted(grupos, key=lambda g: g.total, reverse=True)

        return GastoSummaryResponse(
            fecha_desde=desde,
            fecha_hasta=hasta,
            total=total,
            cantidad=cantidad,
            por_categoria=agrupar(
                "categoria_gasto_id", catalogos.nombres(CategoriaGasto, "nombre_categoria")
            ),
            por_importancia=agrupar(
                "importancia_gasto_id",
                catalogos.nombres(ImportanciaGasto, "nombre_importancia"),
            ),
            por_tipo_pago=agrupar("tipo_pago_id", catalogos.nombres(TipoPago, "nombre")),
            por_origen=agrupar("tipo_origen", None),
        )
