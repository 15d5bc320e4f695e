"""Schemas Pydantic para API FastAPI."""

from finanzas_api.api.schemas.compra import CompraCreate, CompraResponse, CompraUpdate
from finanzas_api.api.schemas.gasto import (
    GastoCreate,
    GastoResponse,
    GastoSummaryResponse,
    GastoUpdate,
    TotalAgrupado,
)
from finanzas_api.api.schemas.gasto_unico import (
    GastoUnicoConGastoResponse,
    GastoUnicoCreate,
    GastoUnicoResponse,
    GastoUnicoUpdate,
)


__all__ = [
    # Gasto
    "GastoCreate",
    "GastoUpdate",
    "GastoResponse",
    "GastoSummaryResponse",
    "TotalAgrupado",
    # Gasto único
    "GastoUnicoCreate",
    "GastoUnicoUpdate",
    "GastoUnicoResponse",
    "GastoUnicoConGastoResponse",
    # Compra
    "CompraCreate",
    "CompraUpdate",
    "CompraResponse",
]
