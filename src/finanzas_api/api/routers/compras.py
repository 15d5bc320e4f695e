"""Router de Compras en cuotas."""

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Path, Query, status
from fastapi.responses import JSONResponse

from finanzas_api.api.dependencies import DBSession, Pagination
from finanzas_api.api.responses import send_paginated, send_success
from finanzas_api.api.schemas.compra import CompraCreate, CompraResponse, CompraUpdate
from finanzas_api.services.compra_service import CompraService


router = APIRouter(prefix="/compras")


@router.get("")
def list_compras(
    db: DBSession,
    page: Pagination,
    categoria_gasto_id: int | None = Query(None, gt=0, description="Filtrar por categoría"),
    importancia_gasto_id: int | None = Query(None, gt=0, description="Filtrar por importancia"),
    tipo_pago_id: int | None = Query(None, gt=0, description="Filtrar por tipo de pago"),
    tarjeta_id: int | None = Query(None, gt=0, description="Filtrar por tarjeta"),
    pendiente_cuotas: bool | None = Query(None, description="Solo compras con cuotas pendientes"),
    fecha_desde: date | None = Query(None, description="Fecha de compra desde (inclusive)"),
    fecha_hasta: date | None = Query(None, description="Fecha de compra hasta (inclusive)"),
    monto_min: Decimal | None = Query(None, ge=0, description="Monto total mínimo"),
    monto_max: Decimal | None = Query(None, ge=0, description="Monto total máximo"),
) -> JSONResponse:
    """Lista compras con filtros y paginación inteligente."""
    result = CompraService(db).search(
        page,
        categoria_gasto_id=categoria_gasto_id,
        importancia_gasto_id=importancia_gasto_id,
        tipo_pago_id=tipo_pago_id,
        tarjeta_id=tarjeta_id,
        pendiente_cuotas=pendiente_cuotas,
        fecha_desde=fecha_desde,
        fecha_hasta=fecha_hasta,
        monto_min=monto_min,
        monto_max=monto_max,
    )
    return send_paginated(result, CompraResponse)


@router.get("/{compra_id}")
def get_compra(db: DBSession, compra_id: int = Path(..., gt=0)) -> JSONResponse:
    """Obtiene una compra por ID."""
    compra = CompraService(db).get(compra_id)
    return send_success(CompraResponse.model_validate(compra))


@router.post("")
def create_compra(data: CompraCreate, db: DBSession) -> JSONResponse:
    """
    Crea una compra en cuotas.

    La compra queda con ``pendiente_cuotas=true``; las cuotas se generan con
    el job de generación.
    """
    compra = CompraService(db).create(data)
    return send_success(
        CompraResponse.model_validate(compra),
        status_code=status.HTTP_201_CREATED,
        message="Compra creada exitosamente",
    )


@router.put("/{compra_id}")
def update_compra(
    data: CompraUpdate,
    db: DBSession,
    compra_id: int = Path(..., gt=0),
) -> JSONResponse:
    """Actualiza una compra. Solo aplica los campos enviados."""
    compra = CompraService(db).update(compra_id, data)
    return send_success(CompraResponse.model_validate(compra), message="Compra actualizada")


@router.delete("/{compra_id}")
def delete_compra(db: DBSession, compra_id: int = Path(..., gt=0)) -> JSONResponse:
    """Elimina una compra y los gastos de sus cuotas."""
    CompraService(db).delete(compra_id)
    return send_success(None, message="Compra eliminada correctamente")
