"""Schemas para Gastos Únicos."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from finanzas_api.api.schemas.common import CatalogoId, Monto, UpdateSchema
from finanzas_api.api.schemas.gasto import GastoResponse


class GastoUnicoCreate(BaseModel):
    """Schema para crear un gasto único (genera su Gasto en la misma operación)."""

    descripcion: str = Field(..., min_length=1, max_length=255, description="Descripción del gasto")
    monto: Monto
    fecha: date = Field(..., description="Fecha del gasto (YYYY-MM-DD)")
    categoria_gasto_id: CatalogoId
    importancia_gasto_id: CatalogoId
    tipo_pago_id: CatalogoId
    tarjeta_id: CatalogoId | None = None
    procesado: bool = Field(default=False, description="Marcado por el job de generación")


class GastoUnicoUpdate(UpdateSchema):
    """Schema para actualizar un gasto único (todos opcionales)."""

    descripcion: str | None = Field(None, min_length=1, max_length=255)
    monto: Monto | None = None
    fecha: date | None = None
    categoria_gasto_id: CatalogoId | None = None
    importancia_gasto_id: CatalogoId | None = None
    tipo_pago_id: CatalogoId | None = None
    tarjeta_id: CatalogoId | None = None
    procesado: bool | None = None


class GastoUnicoResponse(BaseModel):
    """Schema de respuesta de gasto único."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    descripcion: str
    monto: Decimal
    fecha: date
    categoria_gasto_id: int
    importancia_gasto_id: int
    tipo_pago_id: int
    tarjeta_id: int | None
    procesado: bool
    created_at: datetime
    updated_at: datetime


class GastoUnicoConGastoResponse(BaseModel):
    """Gasto único creado junto a su Gasto vinculado."""

    gastoUnico: GastoUnicoResponse  # noqa: N815
    gasto: GastoResponse
