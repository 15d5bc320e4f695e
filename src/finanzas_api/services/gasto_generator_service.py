"""
Job de generación de gastos.

Recorre las entidades origen y crea los Gastos que correspondan a la fecha:

- Gastos únicos sin Gasto vinculado (por ejemplo, cargados antes de que
  existiera la vinculación automática): se genera el Gasto y se marcan
  ``procesado``.
- Compras con cuotas pendientes: se genera un Gasto por cada cuota vencida.

Cada entidad se procesa en su propia transacción; un error en una no frena
al resto y queda registrado en el resultado.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Literal

from sqlalchemy.orm import Session

from finanzas_api.core.database import transaction
from finanzas_api.core.logging import get_logger
from finanzas_api.repositories.compra_repository import CompraRepository
from finanzas_api.repositories.gasto_unico_repository import GastoUnicoRepository
from finanzas_api.services.expense_strategies import (
    ImmediateExpenseStrategy,
    InstallmentExpenseStrategy,
)


logger = get_logger(__name__)

Fuente = Literal["unicos", "compras"]


@dataclass
class BreakdownItem:
    """Conteo de una fuente de generación."""

    processed: int = 0
    generated: int = 0
    skipped: int = 0
    errors: int = 0


@dataclass
class GenerationResult:
    """Resultado de una corrida del job."""

    type: str = "manual"
    success: list[dict[str, Any]] = field(default_factory=list)
    errors: list[dict[str, Any]] = field(default_factory=list)
    breakdown: dict[str, BreakdownItem] = field(
        default_factory=lambda: {"unicos": BreakdownItem(), "compras": BreakdownItem()}
    )

    @property
    def total_generated(self) -> int:
        return sum(item.generated for item in self.breakdown.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": {
                "total_generated": self.total_generated,
                "total_errors": len(self.errors),
                "breakdown": {
                    fuente: vars(item) for fuente, item in self.breakdown.items()
                },
                "type": self.type,
            },
            "details": {
                "success": self.success,
                "errors": self.errors,
            },
        }


class GastoGeneratorService:
    """
    Genera los Gastos pendientes de gastos únicos y compras.

    Example:
        >>> resultado = GastoGeneratorService(db).generate_pending()
        >>> resultado.to_dict()["summary"]["total_generated"]
        3
    """

    def __init__(self, db: Session) -> None:
        """Inicializa el servicio con la sesión de base de datos."""
        self.db = db
        self.gastos_unicos = GastoUnicoRepository(db)
        self.compras = CompraRepository(db)
        self.immediate = ImmediateExpenseStrategy(db)
        self.installment = InstallmentExpenseStrategy(db)

    def generate_pending(self, today: date | None = None, tipo: str = "manual") -> GenerationResult:
        """
        Ejecuta el job completo.

        Args:
            today: Fecha de corte para cuotas vencidas (default: hoy)
            tipo: Etiqueta de la corrida que se devuelve en el resumen

        Returns:
            GenerationResult con conteos y detalle por entidad
        """
        today = today or date.today()
        result = GenerationResult(type=tipo)
        logger.info(f"Iniciando generación de gastos al {today.isoformat()}")

        self._procesar_unicos(result)
        self._procesar_compras(result, today)

        logger.info(
            f"Generación finalizada: {result.total_generated} gasto(s), "
            f"{len(result.errors)} error(es)"
        )
        return result

    def _registrar_error(
        self,
        result: GenerationResult,
        fuente: Fuente,
        source_id: int,
        error: Exception,
    ) -> None:
        result.breakdown[fuente].errors += 1
        result.errors.append({"type": fuente, "id": source_id, "error": str(error)})
        logger.error(f"Error generando gasto desde {fuente} {source_id}: {error}")

    def _procesar_unicos(self, result: GenerationResult) -> None:
        pendientes = self.gastos_unicos.find_sin_gasto()
        breakdown = result.breakdown["unicos"]
        breakdown.processed = len(pendientes)

        for gasto_unico in pendientes:
            source_id = gasto_unico.id
            try:
                if not self.immediate.should_generate(gasto_unico):
                    breakdown.skipped += 1
                    continue
                with transaction(self.db):
                    (gasto,) = self.immediate.generate(gasto_unico)
                    gasto_unico.procesado = True
                breakdown.generated += 1
                result.success.append(
                    {"type": "unico", "id": source_id, "gasto_id": gasto.id}
                )
            except Exception as e:
                self._registrar_error(result, "unicos", source_id, e)

    def _procesar_compras(self, result: GenerationResult, today: date) -> None:
        pendientes = self.compras.find_pendientes()
        breakdown = result.breakdown["compras"]
        breakdown.processed = len(pendientes)

        for compra in pendientes:
            source_id = compra.id
            try:
                if not self.installment.should_generate(compra, today):
                    breakdown.skipped += 1
                    continue
                with transaction(self.db):
                    gastos = self.installment.generate(compra, today)
                breakdown.generated += len(gastos)
                result.success.extend(
                    {"type": "compra", "id": source_id, "gasto_id": gasto.id}
                    for gasto in gastos
                )
            except Exception as e:
                self._registrar_error(result, "compras", source_id, e)
