"""IDs de los catálogos que carga el seed, para armar payloads en los tests."""

CATEGORIA_SUPERMERCADO = 2
CATEGORIA_TRANSPORTE = 3
IMPORTANCIA_ESENCIAL = 1
IMPORTANCIA_NICE_TO_HAVE = 2
TIPO_PAGO_EFECTIVO = 1
TIPO_PAGO_DEBITO = 2
TIPO_PAGO_CREDITO = 3
TARJETA_DEBITO = 1
TARJETA_CREDITO = 2
