"""
Servidor MCP por stdio.

Expone las mismas herramientas que la fachada HTTP para clientes MCP
(por ejemplo, un asistente de IA configurado con este servidor).

Uso:
    python -m finanzas_api.mcp
"""

from typing import Any

from mcp.server.fastmcp import FastMCP

from finanzas_api.config.settings import settings
from finanzas_api.core.logging import get_logger
from finanzas_api.mcp import tools


logger = get_logger(__name__)


mcp = FastMCP(
    name=settings.mcp_server_name,
    instructions="""Servidor MCP de la API de finanzas personales.

HERRAMIENTAS DISPONIBLES:

📋 Documentación:
- get_business_rules: Reglas de negocio
- get_api_endpoints: Endpoints por recurso
- get_gastos_api_docs: Detalle de /api/gastos
- get_swagger_docs: OpenAPI en YAML
- get_validation_schemas: JSON Schema de los payloads
- get_database_schema: Tablas y relaciones

🧪 Testing:
- get_test_scenarios: Escenarios predefinidos
- execute_api_call: Llamada real a la API (GET, POST, PUT, DELETE)
""",
)


@mcp.tool()
def get_business_rules() -> str:
    """Retorna las reglas de negocio completas del sistema."""
    return tools.get_business_rules().first_text


@mcp.tool()
def get_api_endpoints() -> str:
    """Retorna lista de endpoints disponibles para testing."""
    return tools.get_api_endpoints().first_text


@mcp.tool()
def get_gastos_api_docs() -> str:
    """Retorna documentación detallada de los endpoints de /api/gastos."""
    return tools.get_gastos_api_docs().first_text


@mcp.tool()
def get_swagger_docs() -> str:
    """Retorna documentación Swagger/OpenAPI en YAML."""
    return tools.get_swagger_docs().first_text


@mcp.tool()
def get_test_scenarios(category: str = "all") -> str:
    """
    Retorna escenarios de test predefinidos.

    Args:
        category: gastos_unicos, compras, job o all
    """
    return tools.get_test_scenarios(category).first_text


@mcp.tool()
def get_validation_schemas(entity: str | None = None) -> str:
    """
    Retorna los JSON Schema de los payloads de alta.

    Args:
        entity: gasto, gasto_unico o compra (todos si se omite)
    """
    return tools.get_validation_schemas(entity).first_text


@mcp.tool()
def get_database_schema() -> str:
    """Retorna el esquema de base de datos."""
    return tools.get_database_schema().first_text


@mcp.tool()
async def execute_api_call(
    method: str,
    endpoint: str,
    body: dict[str, Any] | None = None,
) -> str:
    """
    Ejecuta llamada a la API para testing.

    Args:
        method: GET, POST, PUT o DELETE
        endpoint: Path de la API, por ejemplo /api/gastos/all
        body: Payload JSON para POST y PUT
    """
    async with tools.build_api_client() as client:
        result = await tools.execute_api_call(client, method, endpoint, body)
    return result.first_text


async def run_server() -> None:
    """Ejecuta el servidor MCP vía stdio."""
    logger.info(f"🚀 MCP Server {settings.mcp_server_name} iniciando (stdio)...")
    logger.info(f"📊 {len(tools.TOOLS)} herramientas disponibles")
    await mcp.run_stdio_async()
