"""Router de Gastos Únicos."""

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Path, Query, status
from fastapi.responses import JSONResponse

from finanzas_api.api.dependencies import DBSession, Pagination
from finanzas_api.api.responses import send_paginated, send_success
from finanzas_api.api.routers.gastos import run_generation_job
from finanzas_api.api.schemas.gasto import GastoResponse
from finanzas_api.api.schemas.gasto_unico import (
    GastoUnicoConGastoResponse,
    GastoUnicoCreate,
    GastoUnicoResponse,
    GastoUnicoUpdate,
)
from finanzas_api.services.gasto_unico_service import GastoUnicoService


router = APIRouter(prefix="/gastos-unicos")


@router.get("")
def list_gastos_unicos(
    db: DBSession,
    page: Pagination,
    categoria_gasto_id: int | None = Query(None, gt=0, description="Filtrar por categoría"),
    importancia_gasto_id: int | None = Query(None, gt=0, description="Filtrar por importancia"),
    tipo_pago_id: int | None = Query(None, gt=0, description="Filtrar por tipo de pago"),
    tarjeta_id: int | None = Query(None, gt=0, description="Filtrar por tarjeta"),
    procesado: bool | None = Query(None, description="Filtrar por estado de procesamiento"),
    fecha_desde: date | None = Query(None, description="Fecha desde (inclusive)"),
    fecha_hasta: date | None = Query(None, description="Fecha hasta (inclusive)"),
    monto_min: Decimal | None = Query(None, ge=0, description="Monto mínimo"),
    monto_max: Decimal | None = Query(None, ge=0, description="Monto máximo"),
) -> JSONResponse:
    """Lista gastos únicos con filtros y paginación inteligente."""
    result = GastoUnicoService(db).search(
        page,
        categoria_gasto_id=categoria_gasto_id,
        importancia_gasto_id=importancia_gasto_id,
        tipo_pago_id=tipo_pago_id,
        tarjeta_id=tarjeta_id,
        procesado=procesado,
        fecha_desde=fecha_desde,
        fecha_hasta=fecha_hasta,
        monto_min=monto_min,
        monto_max=monto_max,
    )
    return send_paginated(result, GastoUnicoResponse)


@router.get("/generate")
def generate_gastos_unicos(db: DBSession) -> JSONResponse:
    """Job de generación (mismo proceso que /api/gastos/generate)."""
    return run_generation_job(db)


@router.get("/{gasto_unico_id}")
def get_gasto_unico(db: DBSession, gasto_unico_id: int = Path(..., gt=0)) -> JSONResponse:
    """Obtiene un gasto único por ID."""
    gasto_unico = GastoUnicoService(db).get(gasto_unico_id)
    return send_success(GastoUnicoResponse.model_validate(gasto_unico))


@router.post("")
def create_gasto_unico(data: GastoUnicoCreate, db: DBSession) -> JSONResponse:
    """
    Crea un gasto único y su Gasto vinculado.

    Ambos registros se crean en la misma transacción y se devuelven en
    ``data.gastoUnico`` y ``data.gasto``.
    """
    gasto_unico, gasto = GastoUnicoService(db).create_with_gasto(data)
    return send_success(
        GastoUnicoConGastoResponse(
            gastoUnico=GastoUnicoResponse.model_validate(gasto_unico),
            gasto=GastoResponse.model_validate(gasto),
        ),
        status_code=status.HTTP_201_CREATED,
        message="Gasto único creado exitosamente",
    )


@router.put("/{gasto_unico_id}")
def update_gasto_unico(
    data: GastoUnicoUpdate,
    db: DBSession,
    gasto_unico_id: int = Path(..., gt=0),
) -> JSONResponse:
    """Actualiza un gasto único y sincroniza su Gasto vinculado."""
    gasto_unico = GastoUnicoService(db).update(gasto_unico_id, data)
    return send_success(
        GastoUnicoResponse.model_validate(gasto_unico),
        message="Gasto único actualizado",
    )


@router.delete("/{gasto_unico_id}")
def delete_gasto_unico(db: DBSession, gasto_unico_id: int = Path(..., gt=0)) -> JSONResponse:
    """
    Elimina un gasto único junto a su Gasto vinculado.

    Un ID inexistente responde 404; repetir el borrado es seguro.
    """
    GastoUnicoService(db).delete(gasto_unico_id)
    return send_success(None, message="Gasto único eliminado correctamente")
