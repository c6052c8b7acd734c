"""
src/linked_stack/tags.py
Ontología de la Lista v1.0.
Define las dos Formas posibles de una lista y las referencias reservadas.
"""
from enum import IntEnum

# =============================================================================
# REFERENCIAS (Índices Físicos en la Arena)
# =============================================================================
# [>= 0] : Índice de una celda viva (Node)
# [-1]   : Fin de cadena (Empty)
# [-2]   : Handle consumido (Ownership transferido)
# =============================================================================

EMPTY_REF = -1
MOVED_REF = -2


class Tag(IntEnum):
    """Formas de una lista. No existen estados intermedios."""
    EMPTY = 0x00  # Terminal, sin datos
    NODE  = 0x01  # (Value, Next) con Next en propiedad exclusiva


def tag_of(ref: int) -> Tag:
    """Retorna la Forma de una referencia física."""
    if ref >= 0:
        return Tag.NODE
    if ref == EMPTY_REF:
        return Tag.EMPTY
    if ref == MOVED_REF:
        raise ValueError("CRITICAL: Acceso a una lista consumida (ownership ya transferido).")
    raise ValueError(f"CRITICAL: Referencia inválida {ref}")
