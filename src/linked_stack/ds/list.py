"""
src/linked_stack/ds/list.py
Estructura de Datos: Lista Enlazada de Dueño Único (Stack).
Versión 1.0: Move-Semantics & Stack-Safe Teardown.
"""
import logging
from typing import Any, Generic, Optional, Sequence, Tuple, TypeVar

from ..memory.allocator import CellPool
from ..memory.heap import Heap
from ..tags import EMPTY_REF, MOVED_REF, Tag, tag_of

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Safety limit para repr/logs
REPR_LIMIT = 10


class List(Generic[T]):
    """
    Lista Inmutable de Dueño Único.

    Cada operación que modifica (push, pop, teardown) CONSUME el handle:
    el resultado es un handle nuevo y el anterior queda 'moved'. Usar un
    handle consumido lanza ValueError. Así ninguna celda tiene dos dueños.

        l = List.new().push(42).push(13)
        value, l = l.pop()      # value == 13, l == Node(42, Empty)
    """
    __slots__ = ('_pool', '_ref')

    def __init__(self, pool: CellPool, ref: int):
        self._pool = pool
        self._ref = ref

    # --- Constructores Estáticos ---

    @staticmethod
    def new(pool: Optional[CellPool] = None) -> 'List[T]':
        """Lista vacía (Empty)."""
        return List(pool if pool is not None else Heap.get_pool(), EMPTY_REF)

    @staticmethod
    def node(value: T, tail: 'List[T]') -> 'List[T]':
        """
        Constructor de la variante Node(value, tail).
        Consume 'tail': la celda nueva pasa a ser su única dueña.
        """
        if not isinstance(tail, List):
            raise TypeError(f"Tail must be List, got {type(tail)}")
        return tail.push(value)

    @staticmethod
    def from_python(items: Sequence[T], pool: Optional[CellPool] = None) -> 'List[T]':
        """O(N). Construye desde una secuencia Python: items[0] queda en la cabeza."""
        acc = List.new(pool)
        for item in reversed(items):
            acc = acc.push(item)
        return acc

    # --- Operaciones (consumen el receptor) ---

    def push(self, value: T) -> 'List[T]':
        """
        O(1) Prepend. Retorna Node(value, self).

        Contrato de dueño único: 'value' no debe contener (directa o
        indirectamente) el handle que resulta de este push. Python no puede
        impedirlo, y esa celda quedaría dueña de sí misma: ni teardown ni el
        GC llegan a ella. Para romper el ciclo hay que sacar el handle del
        valor y consumirlo (pop/teardown).
        """
        ref = self._owned_ref()
        new_ref = self._pool.alloc(value, ref)
        # El handle solo se invalida cuando la celda nueva ya es dueña de la cola
        self._ref = MOVED_REF
        return List(self._pool, new_ref)

    def pop(self) -> Optional[Tuple[T, 'List[T]']]:
        """
        O(1). Retorna None si la lista es Empty (ausencia, no error).
        Si es Node, retorna (value, next): ambos pasan al llamador y la celda
        se libera en esta misma llamada.
        """
        ref = self._owned_ref()
        self._ref = MOVED_REF
        if ref == EMPTY_REF:
            return None

        value, next_ref = self._pool.release(ref)
        return value, List(self._pool, next_ref)

    def teardown(self) -> None:
        """
        Destruye la lista completa en espacio de pila O(1).
        Bucle explícito: se extrae el puntero 'next' y se libera la celda actual,
        sosteniendo como máximo una celda a la vez.
        """
        ref = self._owned_ref()
        self._ref = MOVED_REF
        released = self._release_chain(self._pool, ref)
        logger.debug("Teardown: released %d cells from '%s'", released, self._pool.name)

    @staticmethod
    def _release_chain(pool: CellPool, ref: int) -> int:
        count = 0
        while ref >= 0:
            _, ref = pool.release(ref)
            count += 1
        return count

    # --- Introspección (no consume) ---

    @property
    def is_empty(self) -> bool:
        return self._owned_ref() == EMPTY_REF

    @property
    def tag(self) -> Tag:
        return tag_of(self._ref)

    @property
    def is_moved(self) -> bool:
        return self._ref == MOVED_REF

    def _owned_ref(self) -> int:
        ref = self._ref
        if ref == MOVED_REF:
            raise ValueError("CRITICAL: Acceso a una lista consumida (ownership ya transferido).")
        return ref

    # --- PYTHON MAGIC METHODS ---

    def __len__(self) -> int:
        """O(N) Iterativo."""
        count = 0
        ref = self._owned_ref()
        while ref >= 0:
            _, ref = self._pool.get(ref)
            count += 1
        return count

    def __bool__(self) -> bool:
        return not self.is_empty

    def __eq__(self, other: Any):
        """
        Igualdad estructural O(N) iterativa.
        Misma longitud y valores iguales en el mismo orden; Empty solo es igual a Empty.
        """
        if not isinstance(other, List):
            return NotImplemented
        a = self._owned_ref()
        b = other._owned_ref()
        if self is other:
            return True

        pool_a, pool_b = self._pool, other._pool
        while a >= 0 and b >= 0:
            value_a, a = pool_a.get(a)
            value_b, b = pool_b.get(b)
            if value_a != value_b:
                return False
        return a == b

    __hash__ = None

    def __copy__(self):
        raise TypeError("List tiene dueño único: no se puede copiar (usa pop/push)")

    def __deepcopy__(self, memo):
        raise TypeError("List tiene dueño único: no se puede copiar (usa pop/push)")

    def __repr__(self):
        """Impresión segura. Trunca si es muy larga."""
        if self._ref == MOVED_REF:
            return "<MovedList>"

        parts = []
        ref = self._ref
        while ref >= 0 and len(parts) < REPR_LIMIT:
            value, ref = self._pool.get(ref)
            parts.append(repr(value))

        tail = "..." if ref >= 0 else "Empty"
        return "".join(f"Node({p}, " for p in parts) + tail + ")" * len(parts)

    def __del__(self):
        # Un handle que aún es dueño libera su cadena con el mismo bucle iterativo
        ref = self._ref
        if ref >= 0:
            self._ref = MOVED_REF
            self._release_chain(self._pool, ref)
