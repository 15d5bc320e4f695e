"""Servicios de lógica de negocio - Finanzas API."""

from finanzas_api.services.catalogos import validar_catalogos
from finanzas_api.services.compra_service import CompraService
from finanzas_api.services.expense_strategies import (
    ExpenseStrategy,
    ImmediateExpenseStrategy,
    InstallmentExpenseStrategy,
)
from finanzas_api.services.gasto_generator_service import (
    GastoGeneratorService,
    GenerationResult,
)
from finanzas_api.services.gasto_service import GastoService
from finanzas_api.services.gasto_unico_service import GastoUnicoService


__all__ = [
    "CompraService",
    "ExpenseStrategy",
    "GastoGeneratorService",
    "GastoService",
    "GastoUnicoService",
    "GenerationResult",
    "ImmediateExpenseStrategy",
    "InstallmentExpenseStrategy",
    "validar_catalogos",
]
