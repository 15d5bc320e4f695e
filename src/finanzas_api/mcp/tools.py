"""
Herramientas MCP sobre la API de finanzas.

Cada herramienta devuelve un ``ToolResult`` con el formato de contenido MCP:
``{"content": [{"type": "text", "text": ...}]}``. Cuando el resultado es
estructurado, ``text`` lleva el JSON serializado (los clientes lo parsean
una segunda vez).

Herramientas disponibles:
- get_business_rules: Reglas de negocio en markdown
- get_api_endpoints: Endpoints agrupados por recurso
- get_gastos_api_docs: Detalle de los endpoints de /api/gastos
- get_swagger_docs: OpenAPI de la API en YAML
- get_test_scenarios: Escenarios de prueba predefinidos
- get_validation_schemas: JSON Schema de los payloads de alta
- get_database_schema: Tablas, columnas y foreign keys
- execute_api_call: Reenvía una llamada a la API
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import date
import json
from typing import Any

from fastapi import status
from fastapi.dependencies.models import Dependant
from fastapi.routing import APIRoute
import httpx
from pydantic import BaseModel
import yaml

from finanzas_api.api.errors import AppException, ProxyForwardError, ValidationError
from finanzas_api.api.main import app as api_app
from finanzas_api.api.middleware import CORRELATION_HEADER, get_correlation_id
from finanzas_api.api.schemas.compra import CompraCreate
from finanzas_api.api.schemas.gasto import GastoCreate
from finanzas_api.api.schemas.gasto_unico import GastoUnicoCreate
from finanzas_api.config.settings import settings
from finanzas_api.core.database import Base
from finanzas_api.core.logging import get_logger
import finanzas_api.models  # noqa: F401  registra las tablas en Base.metadata


logger = get_logger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")
CATEGORIAS_ESCENARIOS = ("gastos_unicos", "compras", "job", "all")


# =============================================================================
# TIPOS
# =============================================================================


@dataclass
class ToolResult:
    """Resultado de una herramienta en formato de contenido MCP."""

    content: list[dict[str, str]] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def from_text(cls, text: str, is_error: bool = False) -> "ToolResult":
        return cls(content=[{"type": "text", "text": text}], is_error=is_error)

    @classmethod
    def from_json(cls, payload: Any) -> "ToolResult":
        return cls.from_text(json.dumps(payload, indent=2, ensure_ascii=False, default=str))

    @property
    def first_text(self) -> str:
        return self.content[0]["text"] if self.content else ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"content": self.content}
        if self.is_error:
            result["isError"] = True
        return result


class UnknownToolError(AppException):
    """La herramienta pedida no existe."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"Herramienta desconocida: {name}",
            code="TOOL_NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"tool": name},
        )


_EMPTY_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}

TOOLS: list[dict[str, Any]] = [
    {
        "name": "get_business_rules",
        "description": "Retorna las reglas de negocio completas del sistema",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "get_api_endpoints",
        "description": "Retorna lista de endpoints disponibles para testing",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "get_gastos_api_docs",
        "description": "Retorna documentación detallada de los endpoints de /api/gastos",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "get_swagger_docs",
        "description": "Retorna documentación Swagger/OpenAPI en YAML",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "get_test_scenarios",
        "description": "Retorna escenarios de test predefinidos",
        "inputSchema": {
            "type": "object",
            "properties": {
                "category": {"type": "string", "enum": list(CATEGORIAS_ESCENARIOS)},
            },
        },
    },
    {
        "name": "get_validation_schemas",
        "description": "Retorna los JSON Schema de validación de los payloads de alta",
        "inputSchema": {
            "type": "object",
            "properties": {
                "entity": {"type": "string", "enum": ["gasto", "gasto_unico", "compra"]},
            },
        },
    },
    {
        "name": "get_database_schema",
        "description": "Retorna el esquema de base de datos",
        "inputSchema": _EMPTY_SCHEMA,
    },
    {
        "name": "execute_api_call",
        "description": "Ejecuta llamada a la API para testing",
        "inputSchema": {
            "type": "object",
            "properties": {
                "method": {"type": "string", "enum": list(HTTP_METHODS)},
                "endpoint": {"type": "string"},
                "body": {"type": "object"},
            },
            "required": ["method", "endpoint"],
        },
    },
]


def build_api_client() -> httpx.AsyncClient:
    """Cliente HTTP hacia la API de finanzas."""
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        headers={"Content-Type": "application/json"},
        timeout=settings.api_timeout,
    )


def _api_routes() -> list[APIRoute]:
    return [
        route
        for route in api_app.routes
        if isinstance(route, APIRoute) and route.path.startswith("/api/")
    ]


def _query_params(dependant: Dependant) -> list[str]:
    """Query params de la ruta, incluidos los de sus dependencies (Pagination)."""
    params = [param.name for param in dependant.query_params]
    for sub_dependant in dependant.dependencies:
        params.extend(
            name for name in _query_params(sub_dependant) if name not in params
        )
    return params


def _route_summary(route: APIRoute) -> str:
    description = (route.description or "").strip()
    return description.splitlines()[0] if description else route.name


# =============================================================================
# DOCUMENTACIÓN
# =============================================================================

BUSINESS_RULES = """# Reglas de negocio - Finanzas API

## Gasto
- Es el registro canónico de cada egreso; todo reporte se calcula sobre `gastos`.
- `tipo_origen` indica de dónde salió: `manual`, `gasto_unico` o `compra`.
- Los gastos derivados (`gasto_unico`, `compra`) no se modifican ni eliminan
  desde `/api/gastos` (409 `GASTO_DERIVADO`): se modifica la entidad origen.

## Gasto único
- Al crearse genera su Gasto en la misma transacción (`tipo_origen = gasto_unico`).
- Si falla cualquiera de las dos escrituras no queda ninguna.
- Modificar el gasto único sincroniza su Gasto; eliminarlo elimina ambos.

## Compra
- Al crearse no genera Gastos: queda con `pendiente_cuotas = true`.
- `cantidad_cuotas` entre 1 y 60; cada cuota debe ser de al menos 0.01.
- Más de una cuota requiere una tarjeta que permita cuotas.
- El job de generación crea un Gasto por cada cuota vencida a la fecha.
- Tarjeta de crédito: la primera cuota vence el día de vencimiento posterior
  al cierre del resumen donde cae la compra; las siguientes, mes a mes.
- Otros medios de pago: la cuota i vence i-1 meses después de la compra.
- Las cuotas se redondean hacia abajo al centavo; la última absorbe la diferencia.
- Al generar la última cuota `pendiente_cuotas` pasa a `false`.
- Con cuotas generadas no se modifican `cantidad_cuotas`, `monto_total`,
  `fecha_compra` ni `tarjeta_id` (400).

## Job de generación
- `GET /api/gastos/generate` procesa gastos únicos sin Gasto y compras pendientes.
- Cada entidad se procesa en su propia transacción; los errores se reportan
  en `details.errors` sin frenar al resto.

## Listados
- Sin `limit` se devuelve la colección completa (`meta.pagination = null`).
- Con `limit` (1..1000) y `offset` se devuelve una página con
  `pagination: {limit, offset, hasNext, hasPrev}`.
- Todas las respuestas usan el envelope `{success, data, meta, error}`.
"""


def get_business_rules() -> ToolResult:
    return ToolResult.from_text(BUSINESS_RULES)


def get_api_endpoints() -> ToolResult:
    """
    Endpoints de la API agrupados por recurso.

    Las claves son el recurso con guiones bajos (``gastos_unicos``) y el
    listado se arma desde las rutas registradas en la app.
    """
    endpoints: dict[str, dict[str, Any]] = {}
    for route in _api_routes():
        segment = route.path.split("/")[2]
        recurso = endpoints.setdefault(
            segment.replace("-", "_"),
            {"base": f"/api/{segment}", "endpoints": []},
        )
        for method in sorted(route.methods - {"HEAD"}):
            recurso["endpoints"].append(f"{method} {route.path} - {_route_summary(route)}")
    return ToolResult.from_json(endpoints)


def get_gastos_api_docs() -> ToolResult:
    lines = ["# Endpoints de /api/gastos", ""]
    for route in _api_routes():
        if not route.path.startswith("/api/gastos") or route.path.startswith("/api/gastos-"):
            continue
        for method in sorted(route.methods - {"HEAD"}):
            lines.append(f"## {method} {route.path}")
            lines.append("")
            lines.append((route.description or route.name).strip())
            params = _query_params(route.dependant)
            if params:
                lines.append("")
                lines.append(f"Query params: {', '.join(params)}")
            lines.append("")
    return ToolResult.from_text("\n".join(lines))


def get_swagger_docs() -> ToolResult:
    """OpenAPI de la API de finanzas serializado en YAML."""
    openapi = api_app.openapi()
    header = "# OpenAPI - Finanzas API\n\n"
    return ToolResult.from_text(
        header + yaml.safe_dump(openapi, sort_keys=False, allow_unicode=True)
    )


# =============================================================================
# ESCENARIOS Y ESQUEMAS
# =============================================================================


def _escenarios(hoy: str) -> dict[str, list[dict[str, Any]]]:
    # IDs de catálogo según los datos semilla
    return {
        "gastos_unicos": [
            {
                "name": "Gasto Único Básico",
                "description": "Crear gasto único y su Gasto en la misma transacción",
                "endpoint": "POST /api/gastos-unicos",
                "payload": {
                    "descripcion": "Test gasto único",
                    "monto": 1500,
                    "fecha": hoy,
                    "categoria_gasto_id": 2,
                    "importancia_gasto_id": 2,
                    "tipo_pago_id": 1,
                    "procesado": False,
                },
                "expected": {"status": 201, "fields": ["gastoUnico", "gasto"]},
            },
            {
                "name": "Paginación Gastos Únicos",
                "description": "Sin limit retorna todos los registros",
                "endpoint": "GET /api/gastos-unicos",
                "expected": {
                    "status": 200,
                    "response_structure": {
                        "success": True,
                        "data": "array",
                        "meta": {"total": "number", "type": "collection"},
                    },
                },
            },
            {
                "name": "Paginación con Límite",
                "description": "Con limit retorna metadata de paginación",
                "endpoint": "GET /api/gastos-unicos?limit=3",
                "expected": {
                    "status": 200,
                    "response_structure": {
                        "success": True,
                        "data": "array",
                        "meta": {
                            "total": "number",
                            "type": "collection",
                            "pagination": {
                                "limit": 3,
                                "offset": 0,
                                "hasNext": "boolean",
                                "hasPrev": "boolean",
                            },
                        },
                    },
                },
            },
        ],
        "compras": [
            {
                "name": "Compra Efectivo",
                "description": "La compra queda pendiente hasta que corre el job",
                "endpoint": "POST /api/compras",
                "payload": {
                    "descripcion": "Test efectivo",
                    "monto_total": 5000,
                    "cantidad_cuotas": 1,
                    "fecha_compra": hoy,
                    "categoria_gasto_id": 2,
                    "importancia_gasto_id": 2,
                    "tipo_pago_id": 1,
                },
                "expected": {"status": 201, "pendiente_cuotas": True},
            },
            {
                "name": "Compra Crédito en Cuotas",
                "description": "Compra con tarjeta de crédito: las cuotas esperan al vencimiento",
                "endpoint": "POST /api/compras",
                "payload": {
                    "descripcion": "Test crédito",
                    "monto_total": 9000,
                    "cantidad_cuotas": 3,
                    "fecha_compra": hoy,
                    "categoria_gasto_id": 2,
                    "importancia_gasto_id": 2,
                    "tipo_pago_id": 3,
                    "tarjeta_id": 2,
                },
                "expected": {"status": 201, "pendiente_cuotas": True},
            },
            {
                "name": "Cuotas con Tarjeta de Débito",
                "description": "Una tarjeta que no permite cuotas rechaza cantidad_cuotas > 1",
                "endpoint": "POST /api/compras",
                "payload": {
                    "descripcion": "Test débito en cuotas",
                    "monto_total": 3000,
                    "cantidad_cuotas": 3,
                    "fecha_compra": hoy,
                    "categoria_gasto_id": 2,
                    "importancia_gasto_id": 2,
                    "tipo_pago_id": 2,
                    "tarjeta_id": 1,
                },
                "expected": {"status": 400, "code": "INVALID_CANTIDAD_CUOTAS"},
            },
        ],
        "job": [
            {
                "name": "Job Generación Básico",
                "description": "Ejecutar job de generación y verificar respuesta",
                "endpoint": "GET /api/gastos/generate",
                "expected": {
                    "status": 200,
                    "fields": ["message", "data.summary", "data.details"],
                    "summary_fields": ["total_generated", "total_errors", "breakdown"],
                },
            }
        ],
    }


def get_test_scenarios(category: str = "all", today: date | None = None) -> ToolResult:
    """
    Escenarios de prueba por categoría.

    Args:
        category: Categoría de escenarios o ``all``
        today: Fecha usada en los payloads (default: hoy)

    Returns:
        ToolResult con ``{categoria: [escenarios]}``; una categoría
        desconocida devuelve una lista vacía
    """
    escenarios = _escenarios((today or date.today()).isoformat())
    if category == "all":
        return ToolResult.from_json(escenarios)
    return ToolResult.from_json({category: escenarios.get(category, [])})


VALIDATION_MODELS: dict[str, type[BaseModel]] = {
    "gasto": GastoCreate,
    "gasto_unico": GastoUnicoCreate,
    "compra": CompraCreate,
}


def get_validation_schemas(entity: str | None = None) -> ToolResult:
    if entity in VALIDATION_MODELS:
        return ToolResult.from_json(VALIDATION_MODELS[entity].model_json_schema())
    return ToolResult.from_json(
        {name: model.model_json_schema() for name, model in VALIDATION_MODELS.items()}
    )


def get_database_schema() -> ToolResult:
    """Tablas, columnas y relaciones leídas de la metadata de SQLAlchemy."""
    tables: dict[str, Any] = {}
    relationships: dict[str, str] = {}

    for table in Base.metadata.sorted_tables:
        tables[table.name] = {
            "columns": [
                {
                    "name": column.name,
                    "type": str(column.type),
                    "nullable": column.nullable,
                    "primary_key": column.primary_key,
                }
                for column in table.columns
            ],
        }
        for fk in table.foreign_keys:
            relationships[f"{table.name} -> {fk.column.table.name}"] = fk.parent.name

    relationships["gastos -> origen"] = "tipo_origen + id_origen (polimórfica)"
    return ToolResult.from_json({"tables": tables, "relationships": relationships})


# =============================================================================
# PROXY
# =============================================================================


def _texto(value: Any, name: str) -> str | None:
    """Valida que un argumento de herramienta sea string (o ausente)."""
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"El argumento '{name}' debe ser un string", field=name)
    return value


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


async def execute_api_call(
    client: httpx.AsyncClient,
    method: str,
    endpoint: str,
    body: dict[str, Any] | None = None,
) -> ToolResult:
    """
    Reenvía una llamada a la API de finanzas.

    Args:
        client: Cliente apuntando a la API
        method: GET, POST, PUT o DELETE
        endpoint: Path absoluto, por ejemplo ``/api/gastos/all``
        body: Payload JSON (solo POST y PUT)

    Returns:
        ToolResult cuyo texto es ``{status, headers, data}`` en JSON

    Raises:
        ValidationError: Si el método o el endpoint no son válidos
        ProxyForwardError: Si la API no respondió
    """
    method = (_texto(method, "method") or "").upper()
    if method not in HTTP_METHODS:
        raise ValidationError(
            f"Método no soportado: {method or '(vacío)'}; usar {', '.join(HTTP_METHODS)}",
            field="method",
        )
    endpoint = _texto(endpoint, "endpoint")
    if not endpoint or not endpoint.startswith("/"):
        raise ValidationError("El endpoint debe empezar con '/'", field="endpoint")
    if body is not None and not isinstance(body, dict):
        raise ValidationError("El body debe ser un objeto JSON", field="body")

    payload = body if body is not None and method in ("POST", "PUT") else None
    correlation_id = get_correlation_id()
    headers = {CORRELATION_HEADER: correlation_id} if correlation_id else None
    try:
        response = await client.request(method, endpoint, json=payload, headers=headers)
    except httpx.HTTPError as e:
        logger.error(f"❌ {method} {endpoint} no llegó a la API: {e}")
        raise ProxyForwardError(str(e) or type(e).__name__) from e

    logger.info(f"🔁 {method} {endpoint} -> {response.status_code}")
    return ToolResult.from_json(
        {
            "status": response.status_code,
            "headers": dict(response.headers),
            "data": _parse_body(response),
        }
    )


# =============================================================================
# DISPATCH
# =============================================================================

ToolHandler = Callable[[dict[str, Any], httpx.AsyncClient], Awaitable[ToolResult]]


async def _sync_tool(result: ToolResult) -> ToolResult:
    return result


HANDLERS: dict[str, ToolHandler] = {
    "get_business_rules": lambda args, client: _sync_tool(get_business_rules()),
    "get_api_endpoints": lambda args, client: _sync_tool(get_api_endpoints()),
    "get_gastos_api_docs": lambda args, client: _sync_tool(get_gastos_api_docs()),
    "get_swagger_docs": lambda args, client: _sync_tool(get_swagger_docs()),
    "get_test_scenarios": lambda args, client: _sync_tool(
        get_test_scenarios(_texto(args.get("category"), "category") or "all")
    ),
    "get_validation_schemas": lambda args, client: _sync_tool(
        get_validation_schemas(_texto(args.get("entity"), "entity"))
    ),
    "get_database_schema": lambda args, client: _sync_tool(get_database_schema()),
    "execute_api_call": lambda args, client: execute_api_call(
        client, args.get("method"), args.get("endpoint"), args.get("body")
    ),
}


async def call_tool(
    name: str,
    arguments: dict[str, Any] | None,
    client: httpx.AsyncClient,
) -> ToolResult:
    """
    Ejecuta una herramienta por nombre.

    Raises:
        UnknownToolError: Si la herramienta no existe
    """
    handler = HANDLERS.get(name)
    if handler is None:
        raise UnknownToolError(name)
    logger.debug(f"Ejecutando herramienta {name}")
    return await handler(arguments or {}, client)
