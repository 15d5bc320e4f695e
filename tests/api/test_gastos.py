"""Tests para los endpoints de Gastos, health y el envelope común."""

from typing import Any

from fastapi.testclient import TestClient
import pytest

from tests.catalogos import (
    CATEGORIA_SUPERMERCADO,
    CATEGORIA_TRANSPORTE,
    IMPORTANCIA_ESENCIAL,
    TIPO_PAGO_EFECTIVO,
)


@pytest.fixture
def gasto_payload() -> dict[str, Any]:
    """Payload válido para POST /api/gastos."""
    return {
        "descripcion": "Nafta",
        "monto": "20000.00",
        "fecha": "2025-05-12",
        "categoria_gasto_id": CATEGORIA_TRANSPORTE,
        "importancia_gasto_id": IMPORTANCIA_ESENCIAL,
        "tipo_pago_id": TIPO_PAGO_EFECTIVO,
    }


def _crear(client: TestClient, payload: dict[str, Any]) -> dict[str, Any]:
    response = client.post("/api/gastos", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestGastosManuales:
    """Tests de alta, modificación y baja de gastos manuales."""

    def test_crea_gasto_manual(self, client: TestClient, gasto_payload: dict[str, Any]) -> None:
        """Un gasto creado por la API es de origen manual."""
        gasto = _crear(client, gasto_payload)

        assert gasto["tipo_origen"] == "manual"
        assert gasto["id_origen"] is None
        assert gasto["monto"] == "20000.00"

    def test_update_y_delete(self, client: TestClient, gasto_payload: dict[str, Any]) -> None:
        """Los gastos manuales se pueden modificar y eliminar."""
        gasto = _crear(client, gasto_payload)

        updated = client.put(f"/api/gastos/{gasto['id']}", json={"monto": 21000})
        assert updated.status_code == 200
        assert updated.json()["data"]["monto"] == "21000.00"

        deleted = client.delete(f"/api/gastos/{gasto['id']}")
        assert deleted.status_code == 200
        assert client.get(f"/api/gastos/{gasto['id']}").status_code == 404

    def test_gasto_derivado_no_se_modifica(
        self, client: TestClient, gasto_unico_payload: dict[str, Any]
    ) -> None:
        """Un Gasto generado por un gasto único es 409 al modificarlo o borrarlo."""
        response = client.post("/api/gastos-unicos", json=gasto_unico_payload)
        gasto_id = response.json()["data"]["gasto"]["id"]

        put = client.put(f"/api/gastos/{gasto_id}", json={"monto": 1})
        delete = client.delete(f"/api/gastos/{gasto_id}")

        assert put.status_code == 409
        assert put.json()["code"] == "GASTO_DERIVADO"
        assert delete.status_code == 409
        assert client.get(f"/api/gastos/{gasto_id}").status_code == 200

    def test_get_inexistente(self, client: TestClient) -> None:
        """Un gasto inexistente es 404 GASTO_NOT_FOUND."""
        response = client.get("/api/gastos/4242")

        assert response.status_code == 404
        assert response.json()["code"] == "GASTO_NOT_FOUND"


class TestListadoGastos:
    """Tests de filtros y paginación de GET /api/gastos."""

    @pytest.fixture
    def cinco_gastos(self, client: TestClient, gasto_payload: dict[str, Any]) -> None:
        for dia in range(1, 6):
            _crear(
                client,
                {
                    **gasto_payload,
                    "fecha": f"2025-05-0{dia}",
                    "monto": str(dia * 1000),
                    "categoria_gasto_id": CATEGORIA_SUPERMERCADO
                    if dia % 2
                    else CATEGORIA_TRANSPORTE,
                },
            )

    def test_ordenados_por_fecha_descendente(
        self, client: TestClient, cinco_gastos: None
    ) -> None:
        """Los gastos más recientes vienen primero."""
        data = client.get("/api/gastos").json()["data"]

        assert [g["fecha"] for g in data] == [f"2025-05-0{d}" for d in (5, 4, 3, 2, 1)]

    def test_rango_de_fechas_y_montos(self, client: TestClient, cinco_gastos: None) -> None:
        """Los filtros de rango son inclusivos y conjuntivos."""
        body = client.get(
            "/api/gastos",
            params={
                "fecha_desde": "2025-05-02",
                "fecha_hasta": "2025-05-04",
                "monto_min": 3000,
            },
        ).json()

        assert body["meta"]["total"] == 2
        assert {g["fecha"] for g in body["data"]} == {"2025-05-03", "2025-05-04"}

    def test_ultima_pagina(self, client: TestClient, cinco_gastos: None) -> None:
        """En la última página hasNext es false y hasPrev true."""
        body = client.get("/api/gastos", params={"limit": 2, "offset": 4}).json()

        assert body["meta"]["count"] == 1
        assert body["meta"]["total"] == 5
        assert body["meta"]["pagination"]["hasNext"] is False
        assert body["meta"]["pagination"]["hasPrev"] is True

    def test_all_sin_paginacion(self, client: TestClient, cinco_gastos: None) -> None:
        """/api/gastos/all devuelve todo con meta de colección."""
        body = client.get("/api/gastos/all").json()

        assert body["meta"] == {
            "total": 5,
            "count": 5,
            "type": "collection",
            "pagination": None,
        }

    @pytest.mark.parametrize(
        "params",
        [
            {"fecha_desde": "2025-13-01"},
            {"limit": 0},
            {"limit": 1001},
            {"limit": 10, "offset": -1},
            {"fecha_desde": "2025-05-10", "fecha_hasta": "2025-05-01"},
            {"tipo_origen": "tarjeta"},
        ],
    )
    def test_parametros_invalidos(self, client: TestClient, params: dict[str, Any]) -> None:
        """Parámetros de consulta inválidos son 400."""
        response = client.get("/api/gastos", params=params)

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestSummary:
    """Tests de GET /api/gastos/summary."""

    def test_totales_por_grupo(
        self,
        client: TestClient,
        gasto_payload: dict[str, Any],
        gasto_unico_payload: dict[str, Any],
    ) -> None:
        """El resumen agrupa por categoría y origen con porcentajes."""
        _crear(client, {**gasto_payload, "monto": "3000"})
        client.post("/api/gastos-unicos", json={**gasto_unico_payload, "monto": "1000"})

        body = client.get(
            "/api/gastos/summary",
            params={"fecha_desde": "2025-05-01", "fecha_hasta": "2025-05-31"},
        ).json()
        summary = body["data"]

        assert body["meta"] == {"type": "single"}
        assert summary["total"] == "4000.00"
        assert summary["cantidad"] == 2
        assert summary["por_categoria"][0]["nombre"] == "Transporte"
        assert summary["por_categoria"][0]["porcentaje"] == "75.00"
        assert {o["id"] for o in summary["por_origen"]} == {"manual", "gasto_unico"}

    def test_periodo_vacio(self, client: TestClient) -> None:
        """Sin gastos en el período el total es cero."""
        summary = client.get(
            "/api/gastos/summary",
            params={"fecha_desde": "2020-01-01", "fecha_hasta": "2020-01-31"},
        ).json()["data"]

        assert summary["total"] == "0.00"
        assert summary["por_categoria"] == []


class TestInfraestructura:
    """Health, correlation id y rutas inexistentes."""

    def test_health(self, client: TestClient) -> None:
        """El health check responde con el motor de base de datos."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_correlation_id_se_propaga(self, client: TestClient) -> None:
        """El X-Correlation-ID del request vuelve en la respuesta."""
        response = client.get("/api/gastos", headers={"X-Correlation-ID": "abc123"})

        assert response.headers["X-Correlation-ID"] == "abc123"

    def test_correlation_id_se_genera(self, client: TestClient) -> None:
        """Sin header se genera un correlation id."""
        response = client.get("/api/gastos")

        assert response.headers["X-Correlation-ID"]

    def test_ruta_inexistente(self, client: TestClient) -> None:
        """Una ruta que no existe responde con el envelope de error."""
        response = client.get("/api/no-existe")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "HTTP_404"
