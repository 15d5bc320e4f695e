"""Router de Gastos - consultas, alta manual, resumen y job de generación."""

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Path, Query, status
from fastapi.responses import JSONResponse

from finanzas_api.api.dependencies import DBSession, Pagination
from finanzas_api.api.responses import send_paginated, send_success
from finanzas_api.api.schemas.gasto import GastoCreate, GastoResponse, GastoUpdate
from finanzas_api.models.enums import TipoOrigen
from finanzas_api.services.gasto_generator_service import GastoGeneratorService
from finanzas_api.services.gasto_service import GastoService


router = APIRouter(prefix="/gastos")


def run_generation_job(db: DBSession) -> JSONResponse:
    """Ejecuta el job de generación y devuelve su resumen."""
    result = GastoGeneratorService(db).generate_pending()
    return send_success(result.to_dict(), message="Generación de gastos completada")


# =============================================================================
# Consultas
# =============================================================================


@router.get("")
def list_gastos(
    db: DBSession,
    page: Pagination,
    categoria_gasto_id: int | None = Query(None, gt=0, description="Filtrar por categoría"),
    importancia_gasto_id: int | None = Query(None, gt=0, description="Filtrar por importancia"),
    tipo_pago_id: int | None = Query(None, gt=0, description="Filtrar por tipo de pago"),
    tarjeta_id: int | None = Query(None, gt=0, description="Filtrar por tarjeta"),
    tipo_origen: TipoOrigen | None = Query(None, description="gasto_unico, compra o manual"),
    id_origen: int | None = Query(None, gt=0, description="ID de la entidad origen"),
    fecha_desde: date | None = Query(None, description="Fecha desde (inclusive)"),
    fecha_hasta: date | None = Query(None, description="Fecha hasta (inclusive)"),
    monto_min: Decimal | None = Query(None, ge=0, description="Monto mínimo"),
    monto_max: Decimal | None = Query(None, ge=0, description="Monto máximo"),
) -> JSONResponse:
    """
    Lista gastos con filtros y paginación inteligente.

    Sin ``limit`` devuelve todos los gastos que cumplen los filtros.
    Ordenados por fecha descendente (más recientes primero).
    """
    result = GastoService(db).search(
        page,
        categoria_gasto_id=categoria_gasto_id,
        importancia_gasto_id=importancia_gasto_id,
        tipo_pago_id=tipo_pago_id,
        tarjeta_id=tarjeta_id,
        tipo_origen=tipo_origen,
        id_origen=id_origen,
        fecha_desde=fecha_desde,
        fecha_hasta=fecha_hasta,
        monto_min=monto_min,
        monto_max=monto_max,
    )
    return send_paginated(result, GastoResponse)


@router.get("/all")
def list_all_gastos(db: DBSession) -> JSONResponse:
    """Todos los gastos, sin filtros ni paginación."""
    gastos = GastoService(db).list_all()
    return send_success([GastoResponse.model_validate(g) for g in gastos])


@router.get("/summary")
def gastos_summary(
    db: DBSession,
    fecha_desde: date | None = Query(None, description="Default: primer día del mes actual"),
    fecha_hasta: date | None = Query(None, description="Default: último día del mes actual"),
) -> JSONResponse:
    """Totales del período por categoría, importancia, tipo de pago y origen."""
    summary = GastoService(db).summary(fecha_desde, fecha_hasta)
    return send_success(summary)


@router.get("/generate")
def generate_gastos(db: DBSession) -> JSONResponse:
    """Genera los gastos pendientes de gastos únicos y cuotas de compras."""
    return run_generation_job(db)


@router.get("/{gasto_id}")
def get_gasto(db: DBSession, gasto_id: int = Path(..., gt=0)) -> JSONResponse:
    """Obtiene un gasto por ID."""
    gasto = GastoService(db).get(gasto_id)
    return send_success(GastoResponse.model_validate(gasto))


# =============================================================================
# Escritura
# =============================================================================


@router.post("")
def create_gasto(data: GastoCreate, db: DBSession) -> JSONResponse:
    """Crea un gasto manual."""
    gasto = GastoService(db).create(data)
    return send_success(
        GastoResponse.model_validate(gasto),
        status_code=status.HTTP_201_CREATED,
        message="Gasto creado exitosamente",
    )


@router.put("/{gasto_id}")
def update_gasto(
    data: GastoUpdate,
    db: DBSession,
    gasto_id: int = Path(..., gt=0),
) -> JSONResponse:
    """Actualiza un gasto manual. Solo aplica los campos enviados."""
    gasto = GastoService(db).update(gasto_id, data)
    return send_success(GastoResponse.model_validate(gasto), message="Gasto actualizado")


@router.delete("/{gasto_id}")
def delete_gasto(db: DBSession, gasto_id: int = Path(..., gt=0)) -> JSONResponse:
    """
    Elimina un gasto manual.

    Un ID inexistente responde 404; repetir el borrado es seguro.
    """
    GastoService(db).delete(gasto_id)
    return send_success(None, message="Gasto eliminado correctamente")
