"""Repositorios para acceso a datos.

Implementan el Repository Pattern para separar la lógica de acceso
a datos de la lógica de negocio en los services.

Uso:
    ```python
    from finanzas_api.repositories import GastoRepository

    repo = GastoRepository(db)
    gastos = repo.find_by_origen(TipoOrigen.COMPRA, compra.id)
    ```
"""

from finanzas_api.repositories.base import BaseRepository
from finanzas_api.repositories.catalogo_repository import CatalogoRepository
from finanzas_api.repositories.compra_repository import CompraRepository
from finanzas_api.repositories.gasto_repository import GastoRepository
from finanzas_api.repositories.gasto_unico_repository import GastoUnicoRepository


__all__ = [
    "BaseRepository",
    "CatalogoRepository",
    "CompraRepository",
    "GastoRepository",
    "GastoUnicoRepository",
]
