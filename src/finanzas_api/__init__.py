"""Finanzas API - gastos, gastos únicos y compras en cuotas con proxy MCP."""

__version__ = "1.0.0"
