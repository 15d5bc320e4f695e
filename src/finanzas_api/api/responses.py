"""
Envelope de respuestas exitosas.

Toda respuesta de la API tiene la forma ``{success, data, meta, error}``:

- objeto: ``meta = {"type": "single"}``
- lista: ``meta = {"total", "count", "type": "collection", "pagination"}``,
  con ``pagination = None`` salvo que el cliente haya enviado ``limit``.
"""

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from finanzas_api.core.pagination import Page


def _to_jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list | tuple):
        return [_to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: _to_jsonable(value) for key, value in data.items()}
    return jsonable_encoder(data)


def _meta_for(data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if isinstance(data, list | tuple):
        return {
            "total": len(data),
            "count": len(data),
            "type": "collection",
            "pagination": None,
        }
    return {"type": "single"}


def send_success(
    data: Any,
    status_code: int = status.HTTP_200_OK,
    message: str | None = None,
) -> JSONResponse:
    """
    Respuesta de éxito estandarizada.

    Args:
        data: Modelo, lista de modelos, dict o None
        status_code: HTTP status (default 200)
        message: Mensaje opcional para el cliente

    Returns:
        JSONResponse con el envelope
    """
    content: dict[str, Any] = {
        "success": True,
        "data": _to_jsonable(data),
        "meta": _meta_for(data),
        "error": None,
    }
    if message:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


def send_paginated(page: Page[Any], schema: type[BaseModel]) -> JSONResponse:
    """
    Respuesta de un listado filtrado.

    ``meta.total`` es el total filtrado, ``meta.count`` lo que viaja en esta
    respuesta.
    """
    items = [schema.model_validate(item) for item in page.items]
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "success": True,
            "data": _to_jsonable(items),
            "meta": {
                "total": page.total,
                "count": len(items),
                "type": "collection",
                "pagination": page.pagination_meta(),
            },
            "error": None,
        },
    )
