"""Schemas para Gastos."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from finanzas_api.api.schemas.common import CatalogoId, Monto, UpdateSchema
from finanzas_api.models.enums import TipoOrigen


class GastoCreate(BaseModel):
    """Schema para crear un gasto manual."""

    descripcion: str = Field(..., min_length=1, max_length=255, description="Descripción del gasto")
    monto: Monto
    fecha: date = Field(..., description="Fecha del gasto (YYYY-MM-DD)")
    categoria_gasto_id: CatalogoId
    importancia_gasto_id: CatalogoId
    tipo_pago_id: CatalogoId
    tarjeta_id: CatalogoId | None = None


class GastoUpdate(UpdateSchema):
    """Schema para actualizar un gasto (todos opcionales)."""

    descripcion: str | None = Field(None, min_length=1, max_length=255)
    monto: Monto | None = None
    fecha: date | None = None
    categoria_gasto_id: CatalogoId | None = None
    importancia_gasto_id: CatalogoId | None = None
    tipo_pago_id: CatalogoId | None = None
    tarjeta_id: CatalogoId | None = None


class GastoResponse(BaseModel):
    """Schema de respuesta de gasto."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    descripcion: str
    monto: Decimal
    fecha: date
    categoria_gasto_id: int
    importancia_gasto_id: int
    tipo_pago_id: int
    tarjeta_id: int | None
    tipo_origen: TipoOrigen
    id_origen: int | None
    cantidad_cuotas_totales: int | None
    cantidad_cuotas_pagadas: int | None
    created_at: datetime
    updated_at: datetime


class TotalAgrupado(BaseModel):
    """Total de gastos de un grupo (categoría, importancia, ...)."""

    id: int | str | None
    nombre: str
    total: Decimal
    porcentaje: Decimal


class GastoSummaryResponse(BaseModel):
    """Resumen de gastos de un período."""

    fecha_desde: date
    fecha_hasta: date
    total: Decimal
    cantidad: int
    por_categoria: list[TotalAgrupado]
    por_importancia: list[TotalAgrupado]
    por_tipo_pago: list[TotalAgrupado]
    por_origen: list[TotalAgrupado]
