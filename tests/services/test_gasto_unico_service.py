"""
Tests para GastoUnicoService.

Verifica la doble escritura atómica (gasto único + Gasto vinculado), la
sincronización en updates y el borrado conjunto.
"""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from finanzas_api.api.errors import NotFoundError, ValidationError
from finanzas_api.api.schemas.gasto_unico import GastoUnicoCreate, GastoUnicoUpdate
from finanzas_api.models.enums import TipoOrigen
from finanzas_api.models.gasto import Gasto
from finanzas_api.models.gasto_unico import GastoUnico
from finanzas_api.services.expense_strategies import ImmediateExpenseStrategy
from finanzas_api.services.gasto_unico_service import GastoUnicoService
from tests.catalogos import (
    CATEGORIA_SUPERMERCADO,
    CATEGORIA_TRANSPORTE,
    IMPORTANCIA_NICE_TO_HAVE,
    TIPO_PAGO_EFECTIVO,
)


def _count(session: Session, model: type) -> int:
    return session.scalar(select(func.count()).select_from(model))


@pytest.fixture
def service(session: Session) -> GastoUnicoService:
    return GastoUnicoService(session)


@pytest.fixture
def data() -> GastoUnicoCreate:
    return GastoUnicoCreate(
        descripcion="Cena",
        monto=Decimal("2500.505"),
        fecha=date(2025, 5, 10),
        categoria_gasto_id=CATEGORIA_SUPERMERCADO,
        importancia_gasto_id=IMPORTANCIA_NICE_TO_HAVE,
        tipo_pago_id=TIPO_PAGO_EFECTIVO,
    )


class TestCreateWithGasto:
    """Tests de creación atómica."""

    def test_crea_ambos_registros_vinculados(
        self, service: GastoUnicoService, data: GastoUnicoCreate
    ) -> None:
        """El gasto único y su Gasto se crean juntos y quedan vinculados."""
        gasto_unico, gasto = service.create_with_gasto(data)

        assert gasto.tipo_origen == TipoOrigen.GASTO_UNICO.value
        assert gasto.id_origen == gasto_unico.id
        assert gasto.monto == gasto_unico.monto == Decimal("2500.51")
        assert gasto.fecha == gasto_unico.fecha
        assert gasto_unico.procesado is False

    def test_rollback_si_falla_el_gasto(
        self,
        service: GastoUnicoService,
        data: GastoUnicoCreate,
        session: Session,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Si falla la creación del Gasto no queda el gasto único."""

        def boom(self, source, today=None):
            raise RuntimeError("falla simulada")

        monkeypatch.setattr(ImmediateExpenseStrategy, "generate", boom)

        with pytest.raises(RuntimeError):
            service.create_with_gasto(data)

        assert _count(session, GastoUnico) == 0
        assert _count(session, Gasto) == 0

    def test_catalogo_inexistente(self, service: GastoUnicoService, session: Session) -> None:
        """Un id de catálogo inexistente se rechaza sin escribir nada."""
        data = GastoUnicoCreate(
            descripcion="X",
            monto=Decimal("10"),
            fecha=date(2025, 5, 10),
            categoria_gasto_id=99,
            importancia_gasto_id=IMPORTANCIA_NICE_TO_HAVE,
            tipo_pago_id=TIPO_PAGO_EFECTIVO,
        )

        with pytest.raises(ValidationError) as exc_info:
            service.create_with_gasto(data)

        assert "Categoría con ID 99 no existe" in exc_info.value.message
        assert _count(session, GastoUnico) == 0


class TestUpdateYDelete:
    """Tests de sincronización y borrado."""

    def test_update_sincroniza_el_gasto(
        self, service: GastoUnicoService, data: GastoUnicoCreate
    ) -> None:
        """Los cambios del gasto único se copian a su Gasto."""
        gasto_unico, _ = service.create_with_gasto(data)

        service.update(
            gasto_unico.id,
            GastoUnicoUpdate(monto=Decimal("3000"), categoria_gasto_id=CATEGORIA_TRANSPORTE),
        )

        gasto = service.get_gasto_vinculado(gasto_unico.id)
        assert gasto is not None
        assert gasto.monto == Decimal("3000.00")
        assert gasto.categoria_gasto_id == CATEGORIA_TRANSPORTE
        assert gasto.descripcion == "Cena"

    def test_update_recrea_gasto_faltante(
        self,
        service: GastoUnicoService,
        make_gasto_unico_sin_gasto,
    ) -> None:
        """Si el Gasto vinculado no existe, el update lo vuelve a crear."""
        gasto_unico = make_gasto_unico_sin_gasto()

        service.update(gasto_unico.id, GastoUnicoUpdate(descripcion="Farmacia del barrio"))

        gasto = service.get_gasto_vinculado(gasto_unico.id)
        assert gasto is not None
        assert gasto.descripcion == "Farmacia del barrio"

    def test_update_inexistente(self, service: GastoUnicoService) -> None:
        """Actualizar un id inexistente es NotFoundError."""
        with pytest.raises(NotFoundError):
            service.update(12345, GastoUnicoUpdate(descripcion="X"))

    def test_delete_elimina_ambos(
        self, service: GastoUnicoService, data: GastoUnicoCreate, session: Session
    ) -> None:
        """Eliminar el gasto único elimina también su Gasto."""
        gasto_unico, _ = service.create_with_gasto(data)
        gasto_unico_id = gasto_unico.id

        service.delete(gasto_unico_id)

        assert _count(session, GastoUnico) == 0
        assert _count(session, Gasto) == 0
        with pytest.raises(NotFoundError):
            service.delete(gasto_unico_id)
