"""
src/linked_stack/memory/heap.py
Topología de Memoria v1.0.
Configuración de la Arena por defecto donde viven las listas.
"""
from typing import Any, Dict, Optional

from .allocator import DEFAULT_PAGE_SIZE, CellPool

# Configuración de rendimiento
HEAP_CONFIG = {
    "name": "Heap-Default",
    "page_size": 65536,  # Listas largas: páginas grandes
}


class Heap:
    """
    Orquestador de Memoria.
    Mantiene la Arena compartida por las listas creadas sin pool explícito.
    """
    _pool: Optional[CellPool] = None

    @classmethod
    def get_pool(cls) -> CellPool:
        if cls._pool is None:
            # Inicialización Lazy
            cls._pool = CellPool(
                name=HEAP_CONFIG.get("name", "Heap"),
                page_size=HEAP_CONFIG.get("page_size", DEFAULT_PAGE_SIZE),
            )
        return cls._pool

    @classmethod
    def stats(cls) -> Dict[str, Any]:
        """Informe del estado de la Arena por defecto."""
        return cls.get_pool().stats()

    @classmethod
    def reset(cls):
        """
        UTILIDAD DE TEST: Descarta la Arena por defecto.
        Las listas que sigan vivas conservan su referencia a la Arena antigua.
        """
        cls._pool = None
