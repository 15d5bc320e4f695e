"""
Servicio de Compras en cuotas.

Al crear una compra no se genera ningún Gasto: las cuotas se generan con el
job de generación a medida que vencen.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from finanzas_api.api.errors import NotFoundError, ValidationError
from finanzas_api.api.schemas.compra import CompraCreate, CompraUpdate
from finanzas_api.core.database import transaction
from finanzas_api.core.logging import get_logger
from finanzas_api.core.pagination import FilterBuilder, Page, PageRequest
from finanzas_api.models.compra import Compra
from finanzas_api.models.enums import TipoOrigen
from finanzas_api.repositories.catalogo_repository import CatalogoRepository
from finanzas_api.repositories.compra_repository import CompraRepository
from finanzas_api.repositories.gasto_repository import GastoRepository
from finanzas_api.services.catalogos import validar_catalogos
from finanzas_api.utils.montos import CENTAVO


logger = get_logger(__name__)

# Campos que definen montos y vencimientos de las cuotas
CAMPOS_PLAN_CUOTAS = ("cantidad_cuotas", "monto_total", "fecha_compra", "tarjeta_id")


class CompraService:
    """Servicio para compras en cuotas."""

    def __init__(self, db: Session) -> None:
        """Inicializa el servicio con la sesión de base de datos."""
        self.db = db
        self.repo = CompraRepository(db)
        self.gastos = GastoRepository(db)
        self.catalogos = CatalogoRepository(db)

    def search(
        self,
        page_request: PageRequest,
        *,
        categoria_gasto_id: int | None = None,
        importancia_gasto_id: int | None = None,
        tipo_pago_id: int | None = None,
        tarjeta_id: int | None = None,
        pendiente_cuotas: bool | None = None,
        fecha_desde: date | None = None,
        fecha_hasta: date | None = None,
        monto_min: Decimal | None = None,
        monto_max: Decimal | None = None,
    ) -> Page[Compra]:
        """Lista compras filtradas, de la más nueva a la más vieja."""
        conditions = (
            FilterBuilder(Compra)
            .equals_many(
                categoria_gasto_id=categoria_gasto_id,
                importancia_gasto_id=importancia_gasto_id,
                tipo_pago_id=tipo_pago_id,
                tarjeta_id=tarjeta_id,
            )
            .boolean("pendiente_cuotas", pendiente_cuotas)
            .date_range("fecha_compra", fecha_desde, fecha_hasta)
            .number_range("monto_total", monto_min, monto_max)
            .build()
        )
        return self.repo.find(conditions, page_request)

    def get(self, compra_id: int) -> Compra:
        """
        Obtiene una compra.

        Raises:
            NotFoundError: Si no existe
        """
        compra = self.repo.get(compra_id)
        if compra is None:
            raise NotFoundError("Compra", compra_id)
        return compra

    def cuotas_generadas(self, compra_id: int) -> int:
        return self.gastos.count_by_origen(TipoOrigen.COMPRA, compra_id)

    def _validar_cuotas(self, cantidad_cuotas: int, tarjeta_id: int | None) -> None:
        """Más de una cuota requiere una tarjeta que admita cuotas (si hay tarjeta)."""
        if cantidad_cuotas <= 1 or tarjeta_id is None:
            return
        tarjeta = self.catalogos.get_tarjeta(tarjeta_id)
        if tarjeta is not None and not tarjeta.permite_cuotas:
            raise ValidationError(
                f"La tarjeta {tarjeta.nombre} no permite compras en cuotas",
                field="cantidad_cuotas",
            )

    def create(self, data: CompraCreate) -> Compra:
        """
        Crea una compra con todas sus cuotas pendientes.

        Raises:
            ValidationError: Si un catálogo no existe o la tarjeta no admite cuotas
        """
        payload = data.model_dump()
        validar_catalogos(self.db, payload)
        self._validar_cuotas(data.cantidad_cuotas, data.tarjeta_id)

        with transaction(self.db):
            compra = self.repo.create({**payload, "pendiente_cuotas": True})

        logger.info(
            f"Compra {compra.id} creada: {compra.monto_total} en {compra.cantidad_cuotas} cuota(s)"
        )
        return compra

    def update(self, compra_id: int, data: CompraUpdate) -> Compra:
        """
        Actualiza una compra y recalcula ``pendiente_cuotas``.

        Con cuotas ya generadas el plan queda fijo: ``monto_total``,
        ``cantidad_cuotas``, ``fecha_compra`` y ``tarjeta_id`` no se pueden
        cambiar, así las cuotas siguen sumando ``monto_total``.
        """
        compra = self.get(compra_id)
        cambios = data.cambios()
        validar_catalogos(self.db, cambios)

        cantidad_cuotas = cambios.get("cantidad_cuotas", compra.cantidad_cuotas)
        tarjeta_id = cambios.get("tarjeta_id", compra.tarjeta_id)
        monto_total = cambios.get("monto_total", compra.monto_total)
        generadas = self.cuotas_generadas(compra.id)

        if generadas:
            for campo in CAMPOS_PLAN_CUOTAS:
                if campo in cambios and cambios[campo] != getattr(compra, campo):
                    raise ValidationError(
                        f"La compra ya tiene {generadas} cuota(s) generada(s), "
                        f"{campo} no se puede modificar",
                        field=campo,
                    )
        if monto_total < CENTAVO * cantidad_cuotas:
            raise ValidationError(
                "monto_total no alcanza para un centavo por cuota",
                field="monto_total",
            )
        self._validar_cuotas(cantidad_cuotas, tarjeta_id)

        with transaction(self.db):
            cambios["pendiente_cuotas"] = generadas < cantidad_cuotas
            self.repo.update(compra, cambios)

        logger.info(f"Compra {compra.id} actualizada: {sorted(cambios)}")
        return compra

    def delete(self, compra_id: int) -> None:
        """
        Elimina la compra y los gastos de sus cuotas.

        Raises:
            NotFoundError: Si no existe
        """
        compra = self.get(compra_id)

        with transaction(self.db):
            eliminados = self.gastos.delete_by_origen(TipoOrigen.COMPRA, compra.id)
            self.repo.delete(compra)

        logger.info(f"Compra {compra_id} eliminada ({eliminados} cuota(s) generadas)")
