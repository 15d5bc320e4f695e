"""Utilidad para crear los catálogos iniciales (categorías, importancias, medios de pago y tarjetas)."""

import argparse

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from finanzas_api.core.database import drop_db, get_session, init_db
from finanzas_api.core.logging import get_logger
from finanzas_api.models.catalogos import CategoriaGasto, ImportanciaGasto, Tarjeta, TipoPago
from finanzas_api.models.enums import TipoTarjeta


logger = get_logger(__name__)


CATEGORIAS = [
    "Alquiler",
    "Supermercado",
    "Transporte",
    "Salud",
    "Entretenimiento",
    "Suscripciones",
    "Farmacia",
    "Hogar / Mantenimiento",
    "Tarjetas de crédito / Deudas",
    "Peluquería / Cuidado personal",
    "Regalos",
    "Mascotas",
    "Impuestos / Servicios públicos",
    "Ahorro / Inversión",
    "Compras personales",
    "Vacaciones / Viajes",
    "Otros",
]

IMPORTANCIAS = ["Esencial", "Nice to have", "Prescindible", "No debería"]

# (nombre, permite_cuotas)
TIPOS_PAGO = [
    ("Efectivo", False),
    ("Débito", False),
    ("Crédito", True),
    ("Transferencia", False),
]

TARJETAS = [
    {
        "nombre": "Debito Galicia",
        "tipo": TipoTarjeta.DEBITO.value,
        "banco": "Galicia",
        "dia_mes_cierre": None,
        "dia_mes_vencimiento": None,
        "permite_cuotas": False,
    },
    {
        "nombre": "Credito Mastercard",
        "tipo": TipoTarjeta.CREDITO.value,
        "banco": "Galicia",
        "dia_mes_cierre": 15,
        "dia_mes_vencimiento": 5,
        "permite_cuotas": True,
    },
]


def _vacia(session: Session, model: type) -> bool:
    return not session.scalar(select(func.count()).select_from(model))


def seed_catalogos(session: Session) -> dict[str, int]:
    """
    Crea los catálogos iniciales.

    Cada catálogo se carga solo si su tabla está vacía, así que se puede
    correr más de una vez.

    Args:
        session: Sesión de base de datos (se hace commit al final)

    Returns:
        Cantidad de filas creadas por catálogo
    """
    creados = {"categorias": 0, "importancias": 0, "tipos_pago": 0, "tarjetas": 0}

    if _vacia(session, CategoriaGasto):
        session.add_all(CategoriaGasto(nombre_categoria=nombre) for nombre in CATEGORIAS)
        creados["categorias"] = len(CATEGORIAS)

    if _vacia(session, ImportanciaGasto):
        session.add_all(ImportanciaGasto(nombre_importancia=nombre) for nombre in IMPORTANCIAS)
        creados["importancias"] = len(IMPORTANCIAS)

    if _vacia(session, TipoPago):
        session.add_all(
            TipoPago(nombre=nombre, permite_cuotas=permite_cuotas)
            for nombre, permite_cuotas in TIPOS_PAGO
        )
        creados["tipos_pago"] = len(TIPOS_PAGO)

    if _vacia(session, Tarjeta):
        session.add_all(Tarjeta(**datos) for datos in TARJETAS)
        creados["tarjetas"] = len(TARJETAS)

    session.commit()

    if any(creados.values()):
        logger.success(f"✅ Catálogos creados: {creados}")
    else:
        logger.info("Los catálogos ya existen, omitiendo seed")
    return creados


def main(argv: list[str] | None = None) -> None:
    """Entry point ``finanzas-seed``: crea las tablas y carga los catálogos.

    Con ``--reset`` elimina antes todas las tablas (nunca en producción).
    """
    parser = argparse.ArgumentParser(prog="finanzas-seed", description=__doc__)
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Eliminar todas las tablas antes de recrearlas",
    )
    args = parser.parse_args(argv)

    if args.reset:
        drop_db()
    init_db()
    with get_session() as session:
        seed_catalogos(session)


if __name__ == "__main__":
    main()
