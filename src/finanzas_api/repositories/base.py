"""Base Repository Pattern.

Proporciona operaciones CRUD genéricas siguiendo el Repository Pattern.
Cada entidad tiene su propio repository que hereda de BaseRepository.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, select
from sqlalchemy.orm import Session

from finanzas_api.core.database import Base
from finanzas_api.core.pagination import Page, PageRequest, paginate


# Tipo genérico para modelos SQLAlchemy
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Repositorio base con operaciones CRUD genéricas.

    Attributes:
        model: Clase del modelo SQLAlchemy
        db: Sesión de base de datos
        default_order: Columnas de orden para listados (id desc se agrega siempre)

    Example:
        ```python
        class CompraRepository(BaseRepository[Compra]):
            def __init__(self, db: Session) -> None:
                super().__init__(Compra, db)
        ```
    """

    default_order: tuple[str, ...] = ()

    def __init__(self, model: type[ModelType], db: Session) -> None:
        """
        Inicializa el repositorio.

        Args:
            model: Clase del modelo SQLAlchemy
            db: Sesión de base de datos activa
        """
        self.model = model
        self.db = db

    def _ordering(self) -> list[Any]:
        return [getattr(self.model, field).desc() for field in self.default_order]

    def get(self, entity_id: int) -> ModelType | None:
        """
        Obtiene una entidad por ID.

        Args:
            entity_id: ID de la entidad

        Returns:
            Entidad encontrada o None
        """
        return self.db.get(self.model, entity_id)

    def get_all(self) -> list[ModelType]:
        """Lista todas las entidades con el orden por defecto del repositorio."""
        stmt = select(self.model).order_by(*self._ordering(), self.model.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def find(
        self,
        conditions: list[ColumnElement[bool]],
        page_request: PageRequest,
    ) -> Page[ModelType]:
        """
        Lista entidades filtradas con paginación opcional.

        Args:
            conditions: Predicados armados con FilterBuilder
            page_request: limit/offset del cliente

        Returns:
            Page con items y total filtrado
        """
        return paginate(self.db, self.model, conditions, page_request, self._ordering())

    def create(self, data: dict[str, Any]) -> ModelType:
        """
        Crea una nueva entidad.

        Args:
            data: Diccionario con los campos del modelo

        Returns:
            Entidad creada (con ID asignado)
        """
        entity: ModelType = self.model(**data)
        self.db.add(entity)
        self.db.flush()  # Para obtener el ID generado
        return entity

    def update(self, entity: ModelType, data: dict[str, Any]) -> ModelType:
        """
        Actualiza una entidad existente.

        Args:
            entity: Entidad a actualizar
            data: Campos a modificar

        Returns:
            Entidad actualizada
        """
        for key, value in data.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        self.db.flush()
        return entity

    def delete(self, entity: ModelType) -> None:
        """Elimina una entidad."""
        self.db.delete(entity)
        self.db.flush()
