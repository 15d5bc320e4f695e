"""Schemas para Compras en cuotas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from finanzas_api.api.schemas.common import CatalogoId, Monto, UpdateSchema
from finanzas_api.utils.montos import CENTAVO


MAX_CUOTAS = 60


class CompraCreate(BaseModel):
    """Schema para crear una compra. No genera gastos al crearse."""

    descripcion: str = Field(..., min_length=1, max_length=255, description="Descripción de la compra")
    monto_total: Monto
    cantidad_cuotas: int = Field(default=1, ge=1, le=MAX_CUOTAS, description="Cantidad de cuotas (1-60)")
    fecha_compra: date = Field(..., description="Fecha de la compra (YYYY-MM-DD)")
    categoria_gasto_id: CatalogoId
    importancia_gasto_id: CatalogoId
    tipo_pago_id: CatalogoId
    tarjeta_id: CatalogoId | None = None

    @model_validator(mode="after")
    def cuota_minima(self) -> "CompraCreate":
        """Cada cuota tiene que ser de al menos un centavo."""
        if self.monto_total < CENTAVO * self.cantidad_cuotas:
            raise ValueError("monto_total no alcanza para un centavo por cuota")
        return self


class CompraUpdate(UpdateSchema):
    """Schema para actualizar una compra (todos opcionales)."""

    descripcion: str | None = Field(None, min_length=1, max_length=255)
    monto_total: Monto | None = None
    cantidad_cuotas: int | None = Field(None, ge=1, le=MAX_CUOTAS)
    fecha_compra: date | None = None
    categoria_gasto_id: CatalogoId | None = None
    importancia_gasto_id: CatalogoId | None = None
    tipo_pago_id: CatalogoId | None = None
    tarjeta_id: CatalogoId | None = None


class CompraResponse(BaseModel):
    """Schema de respuesta de compra."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    descripcion: str
    monto_total: Decimal
    cantidad_cuotas: int
    fecha_compra: date
    categoria_gasto_id: int
    importancia_gasto_id: int
    tipo_pago_id: int
    tarjeta_id: int | None
    pendiente_cuotas: bool
    fecha_ultima_cuota_generada: date | None
    created_at: datetime
    updated_at: datetime
