"""
MCP de la API de finanzas.

Herramientas de documentación y proxy sobre la API, expuestas de dos formas:

- stdio (FastMCP) para clientes MCP
- HTTP en /mcp/... para clientes de testing

Herramientas disponibles:
- get_business_rules, get_api_endpoints, get_gastos_api_docs, get_swagger_docs
- get_test_scenarios, get_validation_schemas, get_database_schema
- execute_api_call
"""
