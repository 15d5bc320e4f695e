"""
Configuración de SQLAlchemy y manejo de sesiones de base de datos.

En producción la base es PostgreSQL (psycopg). Cualquier otra URL de
SQLAlchemy funciona igual; los tests usan SQLite en memoria.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from finanzas_api.config.settings import settings
from finanzas_api.core.logging import get_logger


logger = get_logger(__name__)

# Base para modelos SQLAlchemy
Base = declarative_base()


def _create_engine(database_url: str | None = None) -> Engine:
    """
    Crea el engine de SQLAlchemy.

    Args:
        database_url: URL de conexión opcional (para testing)

    Returns:
        Engine de SQLAlchemy configurado
    """
    url = database_url or settings.get_database_url()

    if url.startswith("sqlite"):
        logger.info("Conectando a SQLite...")
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # Una sola conexión compartida, si no cada sesión vería una base vacía
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    logger.info("🐘 Conectando a PostgreSQL...")
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
    )


# Engine de SQLAlchemy
engine = _create_engine()

# SessionLocal para crear sesiones de base de datos
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """
    Context manager para obtener una sesión de base de datos.

    Example:
        >>> from finanzas_api.core.database import get_session
        >>> with get_session() as session:
        ...     session.add(gasto)
        ...     session.commit()
    """
    session = SessionLocal()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def transaction(session: Session) -> Generator[Session, None, None]:
    """
    Límite transaccional para operaciones que escriben varias filas.

    Hace commit al salir sin errores y rollback ante cualquier excepción,
    de modo que ningún lector observe escrituras parciales.

    Example:
        >>> with transaction(db):
        ...     db.add(gasto_unico)
        ...     db.flush()
        ...     db.add(gasto)
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def init_db(bind: Engine | None = None) -> None:
    """Crea todas las tablas registradas en Base.metadata."""
    logger.info("Inicializando base de datos...")

    # Importar modelos para registrarlos en la metadata
    import finanzas_api.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.success("Base de datos inicializada correctamente")


def drop_db(bind: Engine | None = None) -> None:
    """
    Elimina todas las tablas de la base de datos.

    PRECAUCIÓN: borra TODOS los datos. Solo para desarrollo o testing.
    """
    if settings.is_production():
        logger.error("No se puede ejecutar drop_db en producción")
        raise RuntimeError("No se puede eliminar la base de datos en producción")

    logger.warning("Eliminando todas las tablas de la base de datos...")
    Base.metadata.drop_all(bind=bind or engine)
    logger.success("Base de datos eliminada")


__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_session",
    "transaction",
    "init_db",
    "drop_db",
]
