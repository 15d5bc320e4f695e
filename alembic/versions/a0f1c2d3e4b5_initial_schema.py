"""initial schema: catálogos, gastos, gastos únicos y compras

Revision ID: a0f1c2d3e4b5
Revises:
Create Date: 2025-09-01 10:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "a0f1c2d3e4b5"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Fecha de creación del registro",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Fecha de última actualización",
        ),
    ]


def _catalogos() -> list[sa.Column]:
    return [
        sa.Column("categoria_gasto_id", sa.Integer(), nullable=False),
        sa.Column("importancia_gasto_id", sa.Integer(), nullable=False),
        sa.Column("tipo_pago_id", sa.Integer(), nullable=False),
        sa.Column("tarjeta_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["categoria_gasto_id"], ["categorias_gasto.id"]),
        sa.ForeignKeyConstraint(["importancia_gasto_id"], ["importancias_gasto.id"]),
        sa.ForeignKeyConstraint(["tipo_pago_id"], ["tipos_pago.id"]),
        sa.ForeignKeyConstraint(["tarjeta_id"], ["tarjetas.id"]),
    ]


def upgrade() -> None:
    """Create catalog tables and the gastos / gastos_unico / compras tables."""
    op.create_table(
        "categorias_gasto",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "nombre_categoria",
            sa.String(length=100),
            nullable=False,
            comment="Nombre visible de la categoría",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("nombre_categoria"),
    )
    op.create_table(
        "importancias_gasto",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nombre_importancia", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("nombre_importancia"),
    )
    op.create_table(
        "tipos_pago",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nombre", sa.String(length=50), nullable=False),
        sa.Column("permite_cuotas", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("nombre"),
    )
    op.create_table(
        "tarjetas",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nombre", sa.String(length=100), nullable=False),
        sa.Column("tipo", sa.String(length=10), nullable=False, comment="Tipo: debito o credito"),
        sa.Column("banco", sa.String(length=100), nullable=False),
        sa.Column(
            "dia_mes_cierre",
            sa.Integer(),
            nullable=True,
            comment="Día del mes de cierre del resumen (1-31)",
        ),
        sa.Column(
            "dia_mes_vencimiento",
            sa.Integer(),
            nullable=True,
            comment="Día del mes de vencimiento del resumen (1-31)",
        ),
        sa.Column("permite_cuotas", sa.Boolean(), nullable=False),
        sa.CheckConstraint("tipo IN ('debito', 'credito')", name="check_tarjeta_tipo"),
        sa.CheckConstraint(
            "dia_mes_cierre IS NULL OR (dia_mes_cierre BETWEEN 1 AND 31)",
            name="check_dia_cierre",
        ),
        sa.CheckConstraint(
            "dia_mes_vencimiento IS NULL OR (dia_mes_vencimiento BETWEEN 1 AND 31)",
            name="check_dia_vencimiento",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "gastos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("descripcion", sa.String(length=255), nullable=False),
        sa.Column(
            "monto",
            sa.Numeric(precision=12, scale=2),
            nullable=False,
            comment="Monto del gasto",
        ),
        sa.Column("fecha", sa.Date(), nullable=False),
        *_catalogos(),
        sa.Column(
            "tipo_origen",
            sa.String(length=20),
            nullable=False,
            comment="gasto_unico, compra o manual",
        ),
        sa.Column(
            "id_origen",
            sa.Integer(),
            nullable=True,
            comment="ID de la entidad origen (gasto único o compra)",
        ),
        sa.Column("cantidad_cuotas_totales", sa.Integer(), nullable=True),
        sa.Column("cantidad_cuotas_pagadas", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("monto > 0", name="check_gasto_monto_positivo"),
        sa.CheckConstraint(
            "tipo_origen IN ('gasto_unico', 'compra', 'manual')",
            name="check_gasto_tipo_origen",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_gastos_fecha", "gastos", ["fecha"])
    op.create_index("ix_gastos_categoria_gasto_id", "gastos", ["categoria_gasto_id"])
    op.create_index("ix_gastos_origen", "gastos", ["tipo_origen", "id_origen"])

    op.create_table(
        "gastos_unico",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("descripcion", sa.String(length=255), nullable=False),
        sa.Column("monto", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("fecha", sa.Date(), nullable=False),
        *_catalogos(),
        sa.Column(
            "procesado",
            sa.Boolean(),
            nullable=False,
            comment="True cuando el job de generación ya lo procesó",
        ),
        *_timestamps(),
        sa.CheckConstraint("monto > 0", name="check_gasto_unico_monto_positivo"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_gastos_unico_fecha", "gastos_unico", ["fecha"])
    op.create_index(
        "ix_gastos_unico_categoria_gasto_id", "gastos_unico", ["categoria_gasto_id"]
    )

    op.create_table(
        "compras",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("descripcion", sa.String(length=255), nullable=False),
        sa.Column("monto_total", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("cantidad_cuotas", sa.Integer(), nullable=False),
        sa.Column("fecha_compra", sa.Date(), nullable=False),
        *_catalogos(),
        sa.Column(
            "pendiente_cuotas",
            sa.Boolean(),
            nullable=False,
            comment="True mientras queden cuotas sin generar",
        ),
        sa.Column("fecha_ultima_cuota_generada", sa.Date(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("monto_total > 0", name="check_compra_monto_positivo"),
        sa.CheckConstraint(
            "cantidad_cuotas BETWEEN 1 AND 60",
            name="check_compra_cantidad_cuotas",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_compras_fecha_compra", "compras", ["fecha_compra"])
    op.create_index("ix_compras_categoria_gasto_id", "compras", ["categoria_gasto_id"])
    op.create_index("ix_compras_pendiente_cuotas", "compras", ["pendiente_cuotas"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("compras")
    op.drop_table("gastos_unico")
    op.drop_table("gastos")
    op.drop_table("tarjetas")
    op.drop_table("tipos_pago")
    op.drop_table("importancias_gasto")
    op.drop_table("categorias_gasto")
