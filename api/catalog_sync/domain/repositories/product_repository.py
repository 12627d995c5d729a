"""
Interfaz del repositorio de productos.
Define el contrato que debe cumplir cualquier implementación.
"""
from abc import ABC, abstractmethod
from typing import List, Sequence

from catalog_sync.domain.entities.product import ProductRecord


class IProductRepository(ABC):
    """
    Almacen del catalogo.

    La escritura siempre reemplaza la tabla completa dentro de una
    transaccion; nunca hay actualizaciones parciales.
    """

    @abstractmethod
    async def replace_all(self, records: Sequence[ProductRecord]) -> int:
        """
        Reemplaza el contenido de la tabla por `records`.

        Args:
            records: Productos validados, sin IDs repetidos

        Returns:
            int: Cantidad de filas insertadas

        Raises:
            EmptyResultSetError: Si `records` esta vacio
            WriteFailedError: Si la transaccion falla (se hace rollback)
        """
        pass

    @abstractmethod
    async def fetch_by_status(self, status: str) -> List[ProductRecord]:
        """
        Obtiene los productos con el estado indicado.

        Returns:
            List[ProductRecord]: Productos ordenados por ID (vacio si la tabla no existe)
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Cantidad de filas en la tabla."""
        pass
