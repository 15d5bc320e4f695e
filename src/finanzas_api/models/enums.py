"""
Enums centralizados para el sistema de finanzas.

Los valores son los que se guardan en base de datos y viajan en el JSON.
"""

from enum import Enum


class TipoOrigen(str, Enum):
    """Origen de un gasto."""

    GASTO_UNICO = "gasto_unico"
    COMPRA = "compra"
    MANUAL = "manual"

    def __str__(self) -> str:
        """Retorna el valor del enum como string."""
        return self.value


class TipoTarjeta(str, Enum):
    """Tipos de tarjetas bancarias."""

    DEBITO = "debito"
    CREDITO = "credito"

    def __str__(self) -> str:
        """Retorna el valor del enum como string."""
        return self.value
