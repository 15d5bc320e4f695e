"""Tipos y bases compartidos por los schemas."""

from decimal import Decimal
from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, Field

from finanzas_api.utils.montos import a_centavos


# Numeric(12, 2)
MONTO_MAXIMO = Decimal("9999999999.99")


def _monto_valido(valor: Decimal) -> Decimal:
    monto = a_centavos(valor)
    if monto <= 0:
        raise ValueError("El monto debe ser mayor a 0")
    if monto > MONTO_MAXIMO:
        raise ValueError(f"El monto no puede superar {MONTO_MAXIMO}")
    return monto


# Redondeado a centavos, > 0
Monto = Annotated[Decimal, AfterValidator(_monto_valido)]

CatalogoId = Annotated[int, Field(gt=0, description="ID de catálogo")]


class UpdateSchema(BaseModel):
    """
    Base para schemas de actualización parcial.

    Todos los campos son opcionales; solo se aplican los enviados. Un ``null``
    explícito solo se respeta en los campos que admiten nulos.
    """

    NULLABLE: ClassVar[frozenset[str]] = frozenset({"tarjeta_id"})

    def cambios(self) -> dict[str, Any]:
        """Campos enviados por el cliente, listos para aplicar al modelo."""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None or field in self.NULLABLE
        }
