"""Configuración del proyecto."""

from finanzas_api.config.settings import Settings, get_settings, settings


__all__ = ["Settings", "get_settings", "settings"]
