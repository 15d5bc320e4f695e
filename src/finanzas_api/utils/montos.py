"""Redondeo de montos a centavos."""

from decimal import ROUND_HALF_UP, Decimal


CENTAVO = Decimal("0.01")


def a_centavos(valor: Decimal | float | int | str) -> Decimal:
    """
    Redondea un monto a 2 decimales (half up).

    Los floats se convierten vía ``str`` para no arrastrar error binario.

    Example:
        >>> a_centavos(2500.505)
        Decimal('2500.51')
    """
    if not isinstance(valor, Decimal):
        valor = Decimal(str(valor))
    return valor.quantize(CENTAVO, rounding=ROUND_HALF_UP)
