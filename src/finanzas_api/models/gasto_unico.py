"""Modelo de GastoUnico: un gasto puntual que produce un Gasto."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from finanzas_api.core.database import Base
from finanzas_api.models.base import TimestampMixin


class GastoUnico(TimestampMixin, Base):
    """
    Gasto único.

    Cada gasto único creado tiene exactamente un Gasto vinculado con
    ``tipo_origen='gasto_unico'`` e ``id_origen`` igual a su id.
    """

    __tablename__ = "gastos_unico"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    descripcion: Mapped[str] = mapped_column(String(255))
    monto: Mapped[Decimal] = mapped_column(Numeric(precision=12, scale=2))
    fecha: Mapped[date] = mapped_column(Date, index=True)

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

    procesado: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        comment="True cuando el job de generación ya lo procesó",
    )

    __table_args__ = (CheckConstraint("monto > 0", name="check_gasto_unico_monto_positivo"),)

    def __repr__(self) -> str:
        """Representación en string del modelo."""
        return f"<GastoUnico(id={self.id}, descripcion={self.descripcion}, monto={self.monto})>"
