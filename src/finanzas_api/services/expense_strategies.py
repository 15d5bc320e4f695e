"""
Estrategias de generación de gastos.

Cada entidad origen produce Gastos de una forma distinta:

- Gasto único: un Gasto inmediato con los mismos datos.
- Compra: un Gasto por cuota, a medida que las cuotas vencen.

Reglas de vencimiento de cuotas:

- Efectivo/Débito/Transferencia: la cuota 1 vence en ``fecha_compra`` y las
  siguientes el mismo día de los meses posteriores.
- Tarjeta de crédito: la compra entra en el resumen que cierra el
  ``dia_mes_cierre`` (el del mes de compra, o el del mes siguiente si se
  compró después del cierre). La cuota 1 vence el primer
  ``dia_mes_vencimiento`` posterior a ese cierre y las siguientes en ese
  mismo día de los meses posteriores.
"""

from abc import ABC, abstractmethod
import calendar
from datetime import date
from decimal import ROUND_DOWN, Decimal
from typing import Any

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from finanzas_api.core.logging import get_logger, log_movement
from finanzas_api.models.catalogos import Tarjeta
from finanzas_api.models.compra import Compra
from finanzas_api.models.enums import TipoOrigen
from finanzas_api.models.gasto import Gasto
from finanzas_api.models.gasto_unico import GastoUnico
from finanzas_api.repositories.gasto_repository import GastoRepository
from finanzas_api.utils.montos import CENTAVO


logger = get_logger(__name__)

# Día de cierre cuando la tarjeta de crédito no lo tiene configurado
DIA_CIERRE_DEFAULT = 28


def _fecha_en_mes(anio: int, mes: int, dia: int) -> date:
    """Fecha con el día pedido, recortado al último día del mes."""
    ultimo = calendar.monthrange(anio, mes)[1]
    return date(anio, mes, min(dia, ultimo))


class ExpenseStrategy(ABC):
    """
    Estrategia base para generar Gastos desde una entidad origen.

    Implementa el patrón Template Method: las subclases deciden cuándo
    generar y con qué datos; la base arma el Gasto y lo persiste.
    """

    tipo_origen: TipoOrigen

    def __init__(self, db: Session) -> None:
        self.db = db
        self.gastos = GastoRepository(db)

    @abstractmethod
    def should_generate(self, source: Any, today: date) -> bool:
        """Indica si la entidad tiene Gastos por generar a la fecha."""
        ...

    @abstractmethod
    def generate(self, source: Any, today: date) -> list[Gasto]:
        """Genera y persiste (flush) los Gastos que correspondan."""
        ...

    def _gasto_data(self, source: Any, **extra: Any) -> dict[str, Any]:
        data = {
            "descripcion": source.descripcion,
            "categoria_gasto_id": source.categoria_gasto_id,
            "importancia_gasto_id": source.importancia_gasto_id,
            "tipo_pago_id": source.tipo_pago_id,
            "tarjeta_id": source.tarjeta_id,
            "tipo_origen": self.tipo_origen.value,
            "id_origen": source.id,
        }
        data.update(extra)
        return data

    def _crear_gasto(self, data: dict[str, Any]) -> Gasto:
        gasto = self.gastos.create(data)
        log_movement(self.tipo_origen.value, gasto.monto, gasto.descripcion, gasto_id=gasto.id)
        return gasto


class ImmediateExpenseStrategy(ExpenseStrategy):
    """Gasto único: un Gasto con los mismos datos, en la misma fecha."""

    tipo_origen = TipoOrigen.GASTO_UNICO

    def should_generate(self, source: GastoUnico, today: date | None = None) -> bool:
        return self.gastos.count_by_origen(self.tipo_origen, source.id) == 0

    def generate(self, source: GastoUnico, today: date | None = None) -> list[Gasto]:
        gasto = self._crear_gasto(
            self._gasto_data(source, monto=source.monto, fecha=source.fecha)
        )
        logger.debug(f"Gasto {gasto.id} generado para gasto único {source.id}")
        return [gasto]

    def sync(self, source: GastoUnico, gasto: Gasto) -> Gasto:
        """Copia al Gasto vinculado los datos actuales del gasto único."""
        data = self._gasto_data(source, monto=source.monto, fecha=source.fecha)
        return self.gastos.update(gasto, data)


class InstallmentExpenseStrategy(ExpenseStrategy):
    """Compra: un Gasto por cada cuota vencida."""

    tipo_origen = TipoOrigen.COMPRA

    def _tarjeta_credito(self, compra: Compra) -> Tarjeta | None:
        if compra.tarjeta_id is None:
            return None
        tarjeta = self.db.get(Tarjeta, compra.tarjeta_id)
        if tarjeta is None or not tarjeta.es_credito:
            return None
        if tarjeta.dia_mes_vencimiento is None:
            logger.warning(
                f"Tarjeta de crédito {tarjeta.id} sin día de vencimiento, "
                f"compra {compra.id} usa la fecha de compra"
            )
            return None
        return tarjeta

    def primer_vencimiento(self, compra: Compra, tarjeta: Tarjeta | None) -> date:
        """Fecha de vencimiento de la cuota 1."""
        if tarjeta is None or tarjeta.dia_mes_vencimiento is None:
            return compra.fecha_compra

        dia_cierre = tarjeta.dia_mes_cierre or DIA_CIERRE_DEFAULT
        mes_resumen = compra.fecha_compra.replace(day=1)
        if compra.fecha_compra.day > dia_cierre:
            mes_resumen += relativedelta(months=1)

        cierre = _fecha_en_mes(mes_resumen.year, mes_resumen.month, dia_cierre)
        vencimiento = _fecha_en_mes(
            mes_resumen.year, mes_resumen.month, tarjeta.dia_mes_vencimiento
        )
        if vencimiento <= cierre:
            siguiente = mes_resumen + relativedelta(months=1)
            vencimiento = _fecha_en_mes(
                siguiente.year, siguiente.month, tarjeta.dia_mes_vencimiento
            )
        return vencimiento

    def fecha_cuota(self, compra: Compra, tarjeta: Tarjeta | None, numero: int) -> date:
        """Fecha de vencimiento de la cuota ``numero`` (1..N)."""
        primera = self.primer_vencimiento(compra, tarjeta)
        if tarjeta is None or tarjeta.dia_mes_vencimiento is None:
            return primera + relativedelta(months=numero - 1)

        mes = primera.replace(day=1) + relativedelta(months=numero - 1)
        return _fecha_en_mes(mes.year, mes.month, tarjeta.dia_mes_vencimiento)

    @staticmethod
    def montos_cuotas(monto_total: Decimal, cantidad_cuotas: int) -> list[Decimal]:
        """
        Divide el monto total en cuotas de centavos exactos.

        Las cuotas se redondean hacia abajo y la última absorbe la diferencia,
        así la suma es siempre exactamente ``monto_total``.

        Example:
            >>> InstallmentExpenseStrategy.montos_cuotas(Decimal("100.00"), 3)
            [Decimal('33.33'), Decimal('33.33'), Decimal('33.34')]
        """
        if cantidad_cuotas <= 1:
            return [monto_total]

        base = (monto_total / cantidad_cuotas).quantize(CENTAVO, rounding=ROUND_DOWN)
        ultima = monto_total - base * (cantidad_cuotas - 1)
        return [base] * (cantidad_cuotas - 1) + [ultima]

    def cuotas_vencidas(self, compra: Compra, today: date) -> list[int]:
        """Números de cuota vencidos a ``today`` que todavía no tienen Gasto."""
        generadas = self.gastos.count_by_origen(self.tipo_origen, compra.id)
        tarjeta = self._tarjeta_credito(compra)
        return [
            numero
            for numero in range(generadas + 1, compra.cantidad_cuotas + 1)
            if self.fecha_cuota(compra, tarjeta, numero) <= today
        ]

    def should_generate(self, source: Compra, today: date) -> bool:
        if not source.pendiente_cuotas:
            return False
        return bool(self.cuotas_vencidas(source, today))

    def generate(self, source: Compra, today: date) -> list[Gasto]:
        if not source.pendiente_cuotas:
            return []

        tarjeta = self._tarjeta_credito(source)
        montos = self.montos_cuotas(source.monto_total, source.cantidad_cuotas)
        total = source.cantidad_cuotas
        generados: list[Gasto] = []

        for numero in self.cuotas_vencidas(source, today):
            fecha = self.fecha_cuota(source, tarjeta, numero)
            descripcion = f"{source.descripcion} - Cuota {numero}/{total}"
            gasto = self._crear_gasto(
                self._gasto_data(
                    source,
                    descripcion=descripcion[:255],
                    monto=montos[numero - 1],
                    fecha=fecha,
                    cantidad_cuotas_totales=total,
                    cantidad_cuotas_pagadas=numero,
                )
            )
            generados.append(gasto)
            source.fecha_ultima_cuota_generada = fecha
            if numero >= total:
                source.pendiente_cuotas = False

        if generados:
            self.db.flush()
            logger.info(
                f"Compra {source.id}: {len(generados)} cuota(s) generada(s), "
                f"pendiente_cuotas={source.pendiente_cuotas}"
            )
        return generados
