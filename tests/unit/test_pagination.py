"""Tests unitarios para filtros y paginación inteligente."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.orm import Session

from finanzas_api.api.errors import ValidationError
from finanzas_api.core.pagination import FilterBuilder, Page, PageRequest, paginate
from finanzas_api.models.enums import TipoOrigen
from finanzas_api.models.gasto import Gasto
from tests.catalogos import (
    CATEGORIA_SUPERMERCADO,
    CATEGORIA_TRANSPORTE,
    IMPORTANCIA_NICE_TO_HAVE,
    TIPO_PAGO_EFECTIVO,
)


@pytest.fixture
def gastos(session: Session) -> list[Gasto]:
    """Cinco gastos manuales en días consecutivos de mayo."""
    creados = []
    for dia in range(1, 6):
        gasto = Gasto(
            descripcion=f"Gasto {dia}",
            monto=Decimal(dia * 100),
            fecha=date(2025, 5, dia),
            categoria_gasto_id=CATEGORIA_SUPERMERCADO if dia % 2 else CATEGORIA_TRANSPORTE,
            importancia_gasto_id=IMPORTANCIA_NICE_TO_HAVE,
            tipo_pago_id=TIPO_PAGO_EFECTIVO,
            tipo_origen=TipoOrigen.MANUAL.value,
        )
        session.add(gasto)
        creados.append(gasto)
    session.commit()
    return creados


class TestPage:
    """Tests para la metadata de Page."""

    def test_sin_limit_no_hay_metadata(self) -> None:
        """Sin limit la metadata de paginación es None."""
        page = Page(items=[1, 2, 3], total=3)

        assert page.pagination_meta() is None
        assert page.has_next is False

    def test_primera_pagina(self) -> None:
        """Primera página de varias: hasNext sí, hasPrev no."""
        page = Page(items=[1, 2], total=5, limit=2, offset=0)

        assert page.pagination_meta() == {
            "limit": 2,
            "offset": 0,
            "hasNext": True,
            "hasPrev": False,
        }

    def test_ultima_pagina(self) -> None:
        """Última página: hasNext no, hasPrev sí."""
        page = Page(items=[5], total=5, limit=2, offset=4)

        meta = page.pagination_meta()
        assert meta is not None
        assert meta["hasNext"] is False
        assert meta["hasPrev"] is True

    def test_page_request_is_paginated(self) -> None:
        """PageRequest solo pagina cuando hay limit."""
        assert PageRequest().is_paginated is False
        assert PageRequest(limit=10).is_paginated is True


class TestFilterBuilder:
    """Tests para FilterBuilder."""

    def test_ignora_valores_none(self) -> None:
        """Los filtros en None no generan condiciones."""
        conditions = (
            FilterBuilder(Gasto)
            .equals_many(categoria_gasto_id=None, tarjeta_id=None)
            .boolean("id", None)
            .date_range("fecha", None, None)
            .number_range("monto", None, None)
            .build()
        )

        assert conditions == []

    def test_acumula_condiciones(self) -> None:
        """Cada filtro con valor agrega una condición (rango = dos)."""
        conditions = (
            FilterBuilder(Gasto)
            .equals("categoria_gasto_id", 2)
            .date_range("fecha", date(2025, 1, 1), date(2025, 1, 31))
            .build()
        )

        assert len(conditions) == 3

    def test_rango_de_fechas_invertido(self) -> None:
        """fecha_hasta anterior a fecha_desde es un error de validación."""
        with pytest.raises(ValidationError) as exc_info:
            FilterBuilder(Gasto).date_range("fecha", date(2025, 2, 1), date(2025, 1, 1))

        assert exc_info.value.code == "INVALID_FECHA_HASTA"

    def test_rango_de_montos_invertido(self) -> None:
        """Un máximo menor al mínimo es un error de validación."""
        with pytest.raises(ValidationError):
            FilterBuilder(Gasto).number_range("monto", Decimal("100"), Decimal("10"))


class TestPaginate:
    """Tests de paginate contra la base."""

    def test_sin_limit_devuelve_todo(self, session: Session, gastos: list[Gasto]) -> None:
        """Sin limit se devuelve la colección filtrada completa."""
        page = paginate(session, Gasto, [], PageRequest())

        assert page.total == 5
        assert len(page.items) == 5
        assert page.pagination_meta() is None

    def test_limit_y_offset(self, session: Session, gastos: list[Gasto]) -> None:
        """Con limit/offset se corta la página pero el total es el filtrado."""
        page = paginate(
            session,
            Gasto,
            [],
            PageRequest(limit=2, offset=2),
            order_by=[Gasto.fecha.desc()],
        )

        assert page.total == 5
        assert [g.fecha.day for g in page.items] == [3, 2]
        assert page.has_next is True
        assert page.has_prev is True

    def test_offset_fuera_de_rango(self, session: Session, gastos: list[Gasto]) -> None:
        """Un offset mayor al total devuelve una página vacía."""
        page = paginate(session, Gasto, [], PageRequest(limit=10, offset=50))

        assert page.items == []
        assert page.total == 5
        assert page.has_next is False

    def test_filtros_conjuntivos(self, session: Session, gastos: list[Gasto]) -> None:
        """Los filtros se combinan con AND."""
        conditions = (
            FilterBuilder(Gasto)
            .equals("categoria_gasto_id", CATEGORIA_SUPERMERCADO)
            .number_range("monto", Decimal("200"), None)
            .build()
        )

        page = paginate(session, Gasto, conditions, PageRequest())

        # Supermercado son los días impares: 100, 300, 500
        assert page.total == 2
        assert sorted(g.monto for g in page.items) == [Decimal("300.00"), Decimal("500.00")]
