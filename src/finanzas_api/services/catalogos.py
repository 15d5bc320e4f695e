"""Validación de referencias a catálogos antes de escribir."""

from typing import Any

from sqlalchemy.orm import Session

from finanzas_api.api.errors import ValidationError
from finanzas_api.repositories.catalogo_repository import CatalogoRepository


def validar_catalogos(db: Session, data: dict[str, Any]) -> None:
    """
    Verifica que los ids de catálogo del payload existan.

    Raises:
        ValidationError: Con un mensaje por cada id inexistente en ``details.errors``
    """
    repo = CatalogoRepository(db)
    faltantes = repo.missing_ids(data)
    if not faltantes:
        return

    errores = [f"{repo.nombre_de(field)} con ID {value} no existe" for field, value in faltantes]
    raise ValidationError(
        "; ".join(errores),
        details={"errors": errores},
    )
