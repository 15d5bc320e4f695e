"""Tests unitarios para las herramientas MCP."""

import asyncio
from datetime import date
import json
from typing import Any

import httpx
import pytest

from finanzas_api.api.errors import ProxyForwardError, ValidationError
from finanzas_api.mcp import tools
from finanzas_api.mcp.tools import ToolResult, UnknownToolError


def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api")


def _run_execute(handler, **kwargs: Any) -> dict[str, Any]:
    async def _call() -> ToolResult:
        async with _mock_client(handler) as client:
            return await tools.execute_api_call(client, **kwargs)

    return json.loads(asyncio.run(_call()).first_text)


class TestToolResult:
    """Tests del formato de contenido MCP."""

    def test_texto(self) -> None:
        """Un resultado de texto tiene un único bloque text."""
        result = ToolResult.from_text("hola")

        assert result.to_dict() == {"content": [{"type": "text", "text": "hola"}]}

    def test_json_indentado(self) -> None:
        """Los resultados estructurados se serializan con indentación."""
        result = ToolResult.from_json({"monto": "10.00", "descripción": "café"})

        assert result.first_text == json.dumps(
            {"monto": "10.00", "descripción": "café"}, indent=2, ensure_ascii=False
        )

    def test_error(self) -> None:
        """Los errores llevan isError."""
        assert ToolResult.from_text("x", is_error=True).to_dict()["isError"] is True


class TestDocumentacion:
    """Tests de las herramientas de documentación."""

    def test_business_rules(self) -> None:
        """Las reglas cubren las tres entidades."""
        text = tools.get_business_rules().first_text

        assert text.startswith("# Reglas de negocio")
        for seccion in ("## Gasto único", "## Compra", "## Job de generación"):
            assert seccion in text

    def test_gastos_api_docs_solo_gastos(self) -> None:
        """La documentación de /api/gastos no incluye /api/gastos-unicos."""
        text = tools.get_gastos_api_docs().first_text

        assert "## GET /api/gastos/summary" in text
        assert "## GET /api/gastos/generate" in text
        assert "/api/gastos-unicos" not in text
        assert "Query params:" in text

    def test_gastos_api_docs_incluye_paginacion(self) -> None:
        """Los query params del listado incluyen filtros y los de paginación."""
        text = tools.get_gastos_api_docs().first_text

        listado = next(
            line
            for line in text.splitlines()
            if line.startswith("Query params:") and "categoria_gasto_id" in line
        )
        params = listado.removeprefix("Query params: ").split(", ")
        assert {"limit", "offset", "fecha_desde"} <= set(params)
        assert len(params) == len(set(params))

    def test_database_schema(self) -> None:
        """El esquema lista las tablas con sus columnas y relaciones."""
        schema = json.loads(tools.get_database_schema().first_text)

        assert {"gastos", "gastos_unico", "compras", "tarjetas"} <= set(schema["tables"])
        columnas = {c["name"] for c in schema["tables"]["gastos"]["columns"]}
        assert {"tipo_origen", "id_origen", "monto", "fecha"} <= columnas
        assert "gastos -> categorias_gasto" in schema["relationships"]

    def test_validation_schemas(self) -> None:
        """Sin entidad devuelve todas; con entidad solo esa."""
        todas = json.loads(tools.get_validation_schemas().first_text)
        compra = json.loads(tools.get_validation_schemas("compra").first_text)

        assert set(todas) == {"gasto", "gasto_unico", "compra"}
        assert compra["title"] == "CompraCreate"
        assert "cantidad_cuotas" in compra["properties"]


class TestEscenarios:
    """Tests de get_test_scenarios."""

    def test_usa_la_fecha_indicada(self) -> None:
        """Los payloads usan la fecha de referencia."""
        scenarios = json.loads(
            tools.get_test_scenarios("gastos_unicos", today=date(2025, 5, 10)).first_text
        )

        assert scenarios["gastos_unicos"][0]["payload"]["fecha"] == "2025-05-10"

    def test_job(self) -> None:
        """La categoría job describe el endpoint de generación."""
        scenarios = json.loads(tools.get_test_scenarios("job").first_text)

        assert scenarios["job"][0]["endpoint"] == "GET /api/gastos/generate"


class TestExecuteApiCall:
    """Tests de execute_api_call con un transporte simulado."""

    def test_body_solo_en_post_y_put(self) -> None:
        """En GET y DELETE el body no se reenvía."""
        recibidos: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            recibidos.append(request.content)
            return httpx.Response(200, json={"ok": True})

        _run_execute(handler, method="delete", endpoint="/api/gastos/1", body={"x": 1})
        _run_execute(handler, method="PUT", endpoint="/api/gastos/1", body={"x": 1})

        assert recibidos[0] == b""
        assert json.loads(recibidos[1]) == {"x": 1}

    def test_respuesta_no_json(self) -> None:
        """Un body que no es JSON viaja como texto."""
        wrapped = _run_execute(
            lambda request: httpx.Response(500, text="Internal Server Error"),
            method="GET",
            endpoint="/api/gastos",
        )

        assert wrapped["status"] == 500
        assert wrapped["data"] == "Internal Server Error"

    def test_respuesta_vacia(self) -> None:
        """Un body vacío viaja como null."""
        wrapped = _run_execute(
            lambda request: httpx.Response(204), method="DELETE", endpoint="/api/gastos/1"
        )

        assert wrapped["status"] == 204
        assert wrapped["data"] is None

    def test_timeout_es_error_de_proxy(self) -> None:
        """Un timeout del transporte es ProxyForwardError (502)."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ProxyForwardError) as exc_info:
            _run_execute(handler, method="GET", endpoint="/api/gastos")

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Error ejecutando API call: timed out"

    def test_metodo_invalido(self) -> None:
        """Un método no soportado es ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            _run_execute(lambda request: httpx.Response(200), method="HEAD", endpoint="/")

        assert exc_info.value.code == "INVALID_METHOD"


class TestCallTool:
    """Tests del dispatch por nombre."""

    def test_herramienta_desconocida(self) -> None:
        """Un nombre desconocido es UnknownToolError."""

        async def _call() -> ToolResult:
            async with _mock_client(lambda request: httpx.Response(200)) as client:
                return await tools.call_tool("nope", {}, client)

        with pytest.raises(UnknownToolError) as exc_info:
            asyncio.run(_call())

        assert exc_info.value.status_code == 404

    def test_todas_las_herramientas_tienen_handler(self) -> None:
        """Cada herramienta anunciada se puede ejecutar."""
        assert [tool["name"] for tool in tools.TOOLS] == list(tools.HANDLERS)


class TestApiClient:
    """Tests del cliente HTTP hacia la API de finanzas."""

    def test_sin_timeout_propio(self) -> None:
        """Por defecto el proxy no corta llamadas por su cuenta."""
        client = tools.build_api_client()

        assert client.timeout.read is None
        assert client.timeout.connect is None
        asyncio.run(client.aclose())

    def test_timeout_configurable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """api_timeout limita las llamadas cuando se configura."""
        monkeypatch.setattr(tools.settings, "api_timeout", 5.0)

        client = tools.build_api_client()

        assert client.timeout.read == 5.0
        asyncio.run(client.aclose())
