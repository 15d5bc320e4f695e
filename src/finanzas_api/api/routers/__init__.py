"""Routers de la API de finanzas."""

from finanzas_api.api.routers import compras, gastos, gastos_unicos


__all__ = ["compras", "gastos", "gastos_unicos"]
