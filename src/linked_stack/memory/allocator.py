"""
src/linked_stack/memory/allocator.py
Arena Allocator v1.0 (Single-Owner).
Gestión de memoria física para celdas (Value, Next) sin conteo de referencias:
cada celda tiene exactamente un dueño.
"""
import logging
from array import array
from typing import Any, Dict, List, Optional, Tuple

from ..tags import EMPTY_REF

logger = logging.getLogger(__name__)

# Tamaño de página por defecto de toda Arena
DEFAULT_PAGE_SIZE = 4096


class CellPool:
    """
    Gestor de memoria física LIFO (Hot Cache).
    Las celdas libres se encadenan a través del propio array de punteros
    (Free List intrusiva), así la arena no necesita memoria extra para reciclar.
    """
    __slots__ = (
        '_values', '_next', '_live', '_free_head',
        '_capacity', '_name', '_active_count', '_page_size'
    )

    def __init__(self, name: str = "Unknown", page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError(f"page_size debe ser positivo, recibido {page_size}")
        self._name = name
        self._page_size = page_size

        self._active_count = 0
        self._capacity = 0
        self._reset_memory()

    def alloc(self, value: Any, next_ref: int) -> int:
        """Asignación unitaria O(1). La celda nueva es dueña de 'next_ref'."""
        if self._free_head == EMPTY_REF:
            self._expand_memory()

        idx = self._free_head
        self._free_head = self._next[idx]

        self._values[idx] = value
        self._next[idx] = next_ref
        self._live[idx] = 1
        self._active_count += 1
        return idx

    def release(self, idx: int) -> Tuple[Any, int]:
        """
        Libera la celda y transfiere su contenido (Value, Next) al llamador.
        No hay cascada: la cola queda viva y pasa a ser del llamador.
        """
        self._check_live(idx)
        value = self._values[idx]
        next_ref = self._next[idx]

        self._values[idx] = None
        self._live[idx] = 0
        self._next[idx] = self._free_head
        self._free_head = idx
        self._active_count -= 1

        # Arena vacía tras crecer: se devuelve la memoria física
        if self._active_count == 0 and self._capacity > self._page_size:
            self._reset_memory()
        return value, next_ref

    def get(self, idx: int) -> Tuple[Any, int]:
        """Lectura sin mover la propiedad."""
        self._check_live(idx)
        return self._values[idx], self._next[idx]

    def is_live(self, idx: int) -> bool:
        return 0 <= idx < self._capacity and self._live[idx] == 1

    def _check_live(self, idx: int):
        if not self.is_live(idx):
            raise ValueError(f"CRITICAL: Acceso a celda muerta o inexistente idx={idx} en '{self._name}'")

    def _reset_memory(self):
        """Vuelve al estado inicial: sin slots físicos."""
        if self._capacity:
            logger.debug("Arena '%s': releasing %d slots", self._name, self._capacity)

        # Estructuras Físicas
        self._values: List[Optional[Any]] = []
        # Enteros nativos de 64 bits: sin objetos int por celda
        self._next = array('q')
        self._live = bytearray()

        self._free_head = EMPTY_REF
        self._capacity = 0

    def _expand_memory(self):
        """
        Estrategia de Crecimiento Elástica.
        Duplica la capacidad (o añade una página, lo que sea mayor) y encadena
        los slots nuevos en la Free List.
        """
        growth = max(self._capacity, self._page_size)
        start = self._capacity
        end = start + growth

        logger.debug(
            "Arena '%s': expanding +%d slots (capacity %d -> %d)",
            self._name, growth, start, end,
        )

        self._values.extend([None] * growth)
        self._live.extend(bytes(growth))

        # Cadena libre: start -> start+1 -> ... -> end-1 -> (free_head previo)
        self._next.extend(range(start + 1, end + 1))
        self._next[end - 1] = self._free_head
        self._free_head = start

        self._capacity = end

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return self._active_count

    def stats(self) -> Dict[str, Any]:
        """Introspección para monitoreo de salud."""
        return {
            "name": self._name,
            "capacity": self._capacity,
            "active": self._active_count,
            "free": self._capacity - self._active_count,
            "fragmentation": 1.0 - (self._active_count / (self._capacity or 1))
        }
