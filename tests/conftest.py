"""
Configuración de fixtures para pytest.

Estrategia de Testing:
- Cada test usa una base SQLite en memoria nueva (StaticPool, una sola conexión)
- Las tablas se crean desde Base.metadata y los catálogos se cargan con el seed
- La API de finanzas y la fachada MCP se prueban con TestClient; el proxy MCP
  llega a la API por httpx.ASGITransport, sin red
"""

from collections.abc import AsyncIterator, Generator
from datetime import date
from decimal import Decimal
import os
from typing import Any

# Setup de variables de entorno ANTES de cualquier import de la app
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402
import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import Engine, create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from finanzas_api.api.dependencies import get_db  # noqa: E402
from finanzas_api.api.main import app  # noqa: E402
from finanzas_api.core.database import Base  # noqa: E402
import finanzas_api.models  # noqa: E402, F401
from finanzas_api.models.compra import Compra  # noqa: E402
from finanzas_api.models.gasto_unico import GastoUnico  # noqa: E402
from finanzas_api.utils.seed_catalogos import seed_catalogos  # noqa: E402
from tests.catalogos import (  # noqa: E402
    CATEGORIA_SUPERMERCADO,
    IMPORTANCIA_NICE_TO_HAVE,
    TARJETA_CREDITO,
    TIPO_PAGO_CREDITO,
    TIPO_PAGO_EFECTIVO,
)


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Engine SQLite en memoria con tablas y catálogos cargados."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(test_engine)
    with Session(test_engine) as seed_session:
        seed_catalogos(seed_session)

    yield test_engine

    Base.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    """Sesión de base de datos para tests."""
    TestSession = sessionmaker(bind=engine, autoflush=False)
    db_session = TestSession()

    yield db_session

    db_session.close()


@pytest.fixture
def client(session: Session) -> Generator[TestClient, None, None]:
    """Cliente de la API de finanzas con la sesión de tests."""

    def override_get_db() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def mcp_client(client: TestClient) -> Generator[TestClient, None, None]:
    """
    Cliente de la fachada HTTP MCP.

    ``execute_api_call`` llega a la API de finanzas en proceso, con la misma
    sesión de tests que usa ``client``.
    """
    from finanzas_api.mcp.server import app as mcp_app
    from finanzas_api.mcp.server import get_api_client

    async def override_api_client() -> AsyncIterator[httpx.AsyncClient]:
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://testserver",
        ) as api_client:
            yield api_client

    mcp_app.dependency_overrides[get_api_client] = override_api_client

    with TestClient(mcp_app) as test_client:
        yield test_client

    mcp_app.dependency_overrides.clear()


# =============================================================================
# Datos de ejemplo
# =============================================================================


@pytest.fixture
def gasto_unico_payload() -> dict[str, Any]:
    """Payload válido para POST /api/gastos-unicos."""
    return {
        "descripcion": "Supermercado Coto",
        "monto": 1500,
        "fecha": "2025-05-10",
        "categoria_gasto_id": CATEGORIA_SUPERMERCADO,
        "importancia_gasto_id": IMPORTANCIA_NICE_TO_HAVE,
        "tipo_pago_id": TIPO_PAGO_EFECTIVO,
        "procesado": False,
    }


@pytest.fixture
def compra_payload() -> dict[str, Any]:
    """Payload válido para POST /api/compras."""
    return {
        "descripcion": "Heladera",
        "monto_total": 90000,
        "cantidad_cuotas": 3,
        "fecha_compra": "2025-05-10",
        "categoria_gasto_id": CATEGORIA_SUPERMERCADO,
        "importancia_gasto_id": IMPORTANCIA_NICE_TO_HAVE,
        "tipo_pago_id": TIPO_PAGO_CREDITO,
        "tarjeta_id": TARJETA_CREDITO,
    }


@pytest.fixture
def make_compra(session: Session):
    """Factory de compras persistidas (sin pasar por la API)."""

    def _make(**overrides: Any) -> Compra:
        data: dict[str, Any] = {
            "descripcion": "Notebook",
            "monto_total": Decimal("300.00"),
            "cantidad_cuotas": 3,
            "fecha_compra": date(2025, 1, 10),
            "categoria_gasto_id": CATEGORIA_SUPERMERCADO,
            "importancia_gasto_id": IMPORTANCIA_NICE_TO_HAVE,
            "tipo_pago_id": TIPO_PAGO_EFECTIVO,
            "tarjeta_id": None,
            "pendiente_cuotas": True,
        }
        data.update(overrides)
        compra = Compra(**data)
        session.add(compra)
        session.commit()
        return compra

    return _make


@pytest.fixture
def make_gasto_unico_sin_gasto(session: Session):
    """Factory de gastos únicos cargados sin su Gasto vinculado."""

    def _make(**overrides: Any) -> GastoUnico:
        data: dict[str, Any] = {
            "descripcion": "Farmacia",
            "monto": Decimal("850.00"),
            "fecha": date(2025, 5, 3),
            "categoria_gasto_id": CATEGORIA_SUPERMERCADO,
            "importancia_gasto_id": IMPORTANCIA_NICE_TO_HAVE,
            "tipo_pago_id": TIPO_PAGO_EFECTIVO,
            "procesado": False,
        }
        data.update(overrides)
        gasto_unico = GastoUnico(**data)
        session.add(gasto_unico)
        session.commit()
        return gasto_unico

    return _make
