"""Modelos de base de datos - Finanzas API."""

from finanzas_api.models.base import TimestampMixin
from finanzas_api.models.catalogos import CategoriaGasto, ImportanciaGasto, Tarjeta, TipoPago
from finanzas_api.models.compra import Compra
from finanzas_api.models.enums import TipoOrigen, TipoTarjeta
from finanzas_api.models.gasto import Gasto
from finanzas_api.models.gasto_unico import GastoUnico


__all__ = [
    # Mixins
    "TimestampMixin",
    # Catálogos
    "CategoriaGasto",
    "ImportanciaGasto",
    "Tarjeta",
    "TipoPago",
    # Entidades
    "Compra",
    "Gasto",
    "GastoUnico",
    # Enums
    "TipoOrigen",
    "TipoTarjeta",
]
