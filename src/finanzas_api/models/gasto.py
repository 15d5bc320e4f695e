"""Modelo de Gasto: el registro canónico de cada egreso."""

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from finanzas_api.core.database import Base
from finanzas_api.models.base import TimestampMixin
from finanzas_api.models.enums import TipoOrigen


class Gasto(TimestampMixin, Base):
    """
    Gasto registrado.

    Se crea directamente (origen ``manual``) o se deriva de un gasto único
    o de una cuota de compra. ``tipo_origen`` + ``id_origen`` apuntan a la
    entidad que lo generó.
    """

    __tablename__ = "gastos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    descripcion: Mapped[str] = mapped_column(String(255))
    monto: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        comment="Monto del gasto",
    )
    fecha: Mapped[date] = mapped_column(Date, index=True)

    # Catálogos
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

    # Origen
    tipo_origen: Mapped[TipoOrigen] = mapped_column(
        String(20),
        default=TipoOrigen.MANUAL,
        comment="gasto_unico, compra o manual",
    )
    id_origen: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="ID de la entidad origen (gasto único o compra)",
    )

    # Cuotas (solo gastos generados por compras)
    cantidad_cuotas_totales: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cantidad_cuotas_pagadas: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        Index("ix_gastos_origen", "tipo_origen", "id_origen"),
        CheckConstraint("monto > 0", name="check_gasto_monto_positivo"),
        CheckConstraint(
            "tipo_origen IN ('gasto_unico', 'compra', 'manual')",
            name="check_gasto_tipo_origen",
        ),
    )

    def __repr__(self) -> str:
        """Representación en string del modelo."""
        return (
            f"<Gasto(id={self.id}, descripcion={self.descripcion}, "
            f"monto={self.monto}, origen={self.tipo_origen}:{self.id_origen})>"
        )
