"""Modelo de Compra: compra en una o varias cuotas."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from finanzas_api.core.database import Base
from finanzas_api.models.base import TimestampMixin


class Compra(TimestampMixin, Base):
    """
    Compra en cuotas.

    Al crearse queda con ``pendiente_cuotas=True``. El job de generación
    crea un Gasto por cada cuota vencida y apaga el flag al generar la última.
    """

    __tablename__ = "compras"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    descripcion: Mapped[str] = mapped_column(String(255))
    monto_total: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2))
    cantidad_cuotas: Mapped[int] = mapped_column(Integer, default=1)
    fecha_compra: Mapped[date] = mapped_column(Date, index=True)

    categoria_gasto_id: Mapped[int] = mapped_column(
        ForeignKey("categorias_gasto.id"),
        index=True,
    )
    importancia_gasto_id: Mapped[int] = mapped_column(ForeignKey("importancias_gasto.id"))
    tipo_pago_id: Mapped[int] = mapped_column(ForeignKey("tipos_pago.id"))
    tarjeta_id: Mapped[int | None] = mapped_column(
        ForeignKey("tarjetas.id"),
        nullable=True,
    )

    pendiente_cuotas: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        index=True,
        comment="True mientras queden cuotas sin generar",
    )
    fecha_ultima_cuota_generada: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        CheckConstraint("monto_total > 0", name="check_compra_monto_positivo"),
        CheckConstraint(
            "cantidad_cuotas BETWEEN 1 AND 60",
            name="check_compra_cantidad_cuotas",
        ),
    )

    def __repr__(self) -> str:
        """Representación en string del modelo."""
        return (
            f"<Compra(id={self.id}, descripcion={self.descripcion}, "
            f"monto_total={self.monto_total}, cuotas={self.cantidad_cuotas})>"
        )
