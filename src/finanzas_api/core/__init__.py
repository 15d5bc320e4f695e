"""Módulo core: base de datos, logging y motor de paginación."""
