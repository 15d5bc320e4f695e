"""
Configuración centralizada del proyecto usando Pydantic Settings.

Este módulo maneja las variables de entorno de la API de finanzas y del
proxy MCP, con validación automática y valores por defecto para desarrollo.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuración principal de la aplicación."""

    # === Base de datos ===
    database_url: str | None = Field(
        default=None,
        description="URL completa de SQLAlchemy (tiene prioridad sobre postgres_*)",
    )
    postgres_host: str = Field(
        default="localhost",
        description="Host del servidor PostgreSQL",
    )
    postgres_port: int = Field(
        default=5432,
        description="Puerto del servidor PostgreSQL",
    )
    postgres_user: str = Field(
        default="finanzas",
        description="Usuario de PostgreSQL",
    )
    postgres_password: str = Field(
        default="finanzas_dev",
        description="Contraseña de PostgreSQL",
    )
    postgres_db: str = Field(
        default="finanzas",
        description="Nombre de la base de datos PostgreSQL",
    )

    # === Configuración de la aplicación ===
    environment: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Entorno de ejecución",
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="Interfaz donde escucha la API de finanzas",
    )
    api_port: int = Field(
        default=3030,
        description="Puerto de la API de finanzas",
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
        description="Orígenes permitidos por CORS",
    )
    max_page_size: int = Field(
        default=1000,
        description="Máximo permitido para el parámetro limit",
        ge=1,
    )

    # === Proxy MCP ===
    mcp_port: int = Field(
        default=3031,
        description="Puerto del servidor HTTP MCP",
    )
    mcp_server_name: str = Field(
        default="finanzas-api-mcp",
        description="Nombre con el que se anuncia el servidor MCP",
    )
    mcp_server_version: str = Field(
        default="1.0.0",
        description="Versión del servidor MCP",
    )
    api_base_url: str = Field(
        default="http://localhost:3030",
        description="URL base de la API de finanzas a la que reenvía execute_api_call",
    )
    api_timeout: float | None = Field(
        default=None,
        description="Timeout en segundos de execute_api_call (None: sin timeout propio)",
        gt=0,
    )

    # === Configuración de logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Nivel de logging",
    )
    log_to_file: bool = Field(
        default=False,
        description="Escribir logs rotados en logs_directory",
    )
    log_rotation: str = Field(
        default="10 MB",
        description="Tamaño máximo de los archivos de log antes de rotar",
    )
    log_retention: str = Field(
        default="1 month",
        description="Tiempo de retención de logs antiguos",
    )
    logs_directory: Path = Field(
        default=Path("logs"),
        description="Directorio donde se guardan los logs",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("api_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Evita dobles barras al concatenar endpoints."""
        return value.rstrip("/")

    def get_database_url(self) -> str:
        """
        Obtiene la URL de conexión a la base de datos.

        Returns:
            str: database_url si está definida, si no la URL de PostgreSQL
        """
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    def is_development(self) -> bool:
        """Verifica si el entorno es de desarrollo."""
        return self.environment == "development"

    def is_production(self) -> bool:
        """Verifica si el entorno es de producción."""
        return self.environment == "production"

    def is_testing(self) -> bool:
        """Verifica si el entorno es de testing."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """
    Obtiene una instancia singleton de Settings.

    Returns:
        Settings: Instancia singleton de configuración
    """
    return Settings()


# Instancia global de configuración
settings = get_settings()
