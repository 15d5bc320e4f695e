"""Modelos de catálogos: categorías, importancias, tipos de pago y tarjetas."""

__all__ = ["CategoriaGasto", "ImportanciaGasto", "Tarjeta", "TipoPago"]

from sqlalchemy import Boolean, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from finanzas_api.core.database import Base
from finanzas_api.models.enums import TipoTarjeta


class CategoriaGasto(Base):
    """Categoría de un gasto (Supermercado, Transporte, ...)."""

    __tablename__ = "categorias_gasto"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre_categoria: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        comment="Nombre visible de la categoría",
    )

    def __repr__(self) -> str:
        """Representación en string del modelo."""
        return f"<CategoriaGasto(id={self.id}, nombre={self.nombre_categoria})>"


class ImportanciaGasto(Base):
    """Qué tan necesario es un gasto (Esencial, Prescindible, ...)."""

    __tablename__ = "importancias_gasto"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre_importancia: Mapped[str] = mapped_column(String(100), unique=True)

    def __repr__(self) -> str:
        """Representación en string del modelo."""
        return f"<ImportanciaGasto(id={self.id}, nombre={self.nombre_importancia})>"


class TipoPago(Base):
    """Medio de pago. Solo algunos admiten cuotas."""

    __tablename__ = "tipos_pago"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(50), unique=True)
    permite_cuotas: Mapped[bool] = mapped_column(Boolean, default=False)

    def __repr__(self) -> str:
        """Representación en string del modelo."""
        return f"<TipoPago(id={self.id}, nombre={self.nombre})>"


class Tarjeta(Base):
    """
    Tarjeta bancaria.

    Las tarjetas de crédito tienen día de cierre y de vencimiento, que
    determinan en qué mes cae la primera cuota de una compra.
    """

    __tablename__ = "tarjetas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(100))
    tipo: Mapped[TipoTarjeta] = mapped_column(
        String(10),
        comment="Tipo: debito o credito",
    )
    banco: Mapped[str] = mapped_column(String(100))
    dia_mes_cierre: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Día del mes de cierre del resumen (1-31)",
    )
    dia_mes_vencimiento: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Día del mes de vencimiento del resumen (1-31)",
    )
    permite_cuotas: Mapped[bool] = mapped_column(Boolean, default=False)

    __table_args__ = (
        CheckConstraint("tipo IN ('debito', 'credito')", name="check_tarjeta_tipo"),
        CheckConstraint(
            "dia_mes_cierre IS NULL OR (dia_mes_cierre BETWEEN 1 AND 31)",
            name="check_dia_cierre",
        ),
        CheckConstraint(
            "dia_mes_vencimiento IS NULL OR (dia_mes_vencimiento BETWEEN 1 AND 31)",
            name="check_dia_vencimiento",
        ),
    )

    @property
    def es_credito(self) -> bool:
        return self.tipo == TipoTarjeta.CREDITO

    def __repr__(self) -> str:
        """Representación en string del modelo."""
        return f"<Tarjeta(id={self.id}, nombre={self.nombre}, tipo={self.tipo})>"
