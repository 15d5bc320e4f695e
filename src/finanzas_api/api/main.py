"""FastAPI Application - Finanzas API.

API REST de finanzas personales: gastos, gastos únicos y compras en cuotas.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from finanzas_api import __version__
from finanzas_api.api.errors import setup_exception_handlers
from finanzas_api.api.middleware import setup_middlewares
from finanzas_api.api.routers import compras, gastos, gastos_unicos
from finanzas_api.config.settings import settings
from finanzas_api.core.database import engine
from finanzas_api.core.logging import get_logger


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager para startup/shutdown."""
    logger.info(f"🚀 Iniciando Finanzas API en el puerto {settings.api_port}...")
    yield
    logger.info("🛑 Finanzas API detenida")


app = FastAPI(
    title="Finanzas API",
    description="""
## API de Finanzas Personales

- **Gastos**: registro canónico de cada egreso
- **Gastos únicos**: al crearse generan su Gasto en la misma transacción
- **Compras**: compras en cuotas; el job de generación crea un Gasto por cuota vencida

### Respuestas
Todas las respuestas usan el envelope `{success, data, meta, error}`.
Los listados aceptan `limit`/`offset`; sin `limit` se devuelve la colección
completa con `meta.pagination = null`.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configurar manejo global de errores
setup_exception_handlers(app)

# Configurar middlewares (Correlation ID, Request Logging)
setup_middlewares(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Incluir routers
app.include_router(gastos.router, prefix="/api", tags=["Gastos"])
app.include_router(gastos_unicos.router, prefix="/api", tags=["Gastos Únicos"])
app.include_router(compras.router, prefix="/api", tags=["Compras"])


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint con información del API."""
    return {
        "name": "Finanzas API",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "database": engine.dialect.name,
        "environment": settings.environment,
    }


def main() -> None:
    """Entry point ``finanzas-api``: sirve la API con uvicorn."""
    uvicorn.run(
        "finanzas_api.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
