"""
Fachada HTTP del servidor MCP (puerto 3031).

Expone las herramientas MCP por HTTP para clientes de testing que no hablan
el protocolo stdio:

- GET  /mcp/health
- GET  /mcp/tools
- POST /mcp/tools/{tool_name}
- GET  /mcp/api-docs
"""

from collections.abc import AsyncIterator
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import Body, Depends, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import httpx
import uvicorn

from finanzas_api.api.errors import ProxyForwardError, setup_exception_handlers
from finanzas_api.api.middleware import setup_middlewares
from finanzas_api.config.settings import settings
from finanzas_api.core.logging import get_logger
from finanzas_api.mcp.tools import (
    TOOLS,
    ToolResult,
    build_api_client,
    call_tool,
    get_swagger_docs,
)


logger = get_logger(__name__)


async def get_api_client() -> AsyncIterator[httpx.AsyncClient]:
    """Dependency que provee el cliente hacia la API de finanzas."""
    async with build_api_client() as client:
        yield client


ApiClient = Annotated[httpx.AsyncClient, Depends(get_api_client)]


app = FastAPI(
    title="Finanzas API MCP",
    description="Herramientas MCP de documentación y proxy sobre la API de finanzas.",
    version=settings.mcp_server_version,
)

setup_exception_handlers(app)
setup_middlewares(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/mcp/health", tags=["Health"])
async def health() -> dict[str, str]:
    """Estado del servidor MCP (no verifica la API de finanzas)."""
    return {
        "status": "ok",
        "server": settings.mcp_server_name,
        "version": settings.mcp_server_version,
        "timestamp": datetime.now(UTC).isoformat(),
    }


@app.get("/mcp/tools", tags=["Tools"])
async def list_tools() -> dict[str, Any]:
    return {"tools": TOOLS}


@app.post("/mcp/tools/{tool_name}", tags=["Tools"])
async def run_tool(
    tool_name: str,
    client: ApiClient,
    arguments: Annotated[dict[str, Any] | None, Body()] = None,
) -> Any:
    """
    Ejecuta una herramienta.

    Una herramienta desconocida responde 404. Si la API no respondió a
    ``execute_api_call`` se devuelve el status del proxy con el error dentro
    del contenido de la herramienta.
    """
    try:
        result = await call_tool(tool_name, arguments, client)
    except ProxyForwardError as e:
        return JSONResponse(
            status_code=e.status_code,
            content=ToolResult.from_text(e.message, is_error=True).to_dict(),
        )
    return result.to_dict()


@app.get("/mcp/api-docs", tags=["Docs"])
async def api_docs() -> Response:
    """OpenAPI de la API de finanzas en YAML."""
    return Response(content=get_swagger_docs().first_text, media_type="application/x-yaml")


def main() -> None:
    """Sirve la fachada HTTP con uvicorn."""
    logger.info(f"🚀 Finanzas API MCP Server (HTTP) en puerto {settings.mcp_port}")
    uvicorn.run(
        "finanzas_api.mcp.server:app",
        host=settings.api_host,
        port=settings.mcp_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
