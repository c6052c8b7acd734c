"""
tests/linked_stack/memory/test_allocator.py
Verificación de la Arena de celdas (Value, Next).
"""
import logging
import unittest

from linked_stack.memory import heap
from linked_stack.memory.allocator import DEFAULT_PAGE_SIZE, CellPool
from linked_stack.tags import EMPTY_REF


class TestCellPool(unittest.TestCase):

    def setUp(self):
        self.pool = CellPool(name="Test-Pool", page_size=4)

    def test_alloc_and_get(self):
        idx = self.pool.alloc("x", EMPTY_REF)
        self.assertTrue(self.pool.is_live(idx))
        self.assertEqual(self.pool.get(idx), ("x", EMPTY_REF))
        self.assertEqual(len(self.pool), 1)

    def test_release_transfers_contents(self):
        tail = self.pool.alloc("tail", EMPTY_REF)
        head = self.pool.alloc("head", tail)

        value, next_ref = self.pool.release(head)
        self.assertEqual((value, next_ref), ("head", tail))
        self.assertFalse(self.pool.is_live(head))
        # Sin cascada: la cola sigue viva
        self.assertTrue(self.pool.is_live(tail))

    def test_dead_cell_access_raises(self):
        idx = self.pool.alloc(1, EMPTY_REF)
        self.pool.release(idx)
        with self.assertRaises(ValueError):
            self.pool.release(idx)
        with self.assertRaises(ValueError):
            self.pool.get(idx)
        with self.assertRaises(ValueError):
            self.pool.get(12345)
        with self.assertRaises(ValueError):
            self.pool.get(EMPTY_REF)

    def test_lifo_recycling(self):
        """El slot liberado más recientemente es el próximo en asignarse (Hot Cache)."""
        a = self.pool.alloc("a", EMPTY_REF)
        b = self.pool.alloc("b", EMPTY_REF)
        self.pool.release(a)
        self.pool.release(b)
        self.assertEqual(self.pool.alloc("c", EMPTY_REF), b)
        self.assertEqual(self.pool.alloc("d", EMPTY_REF), a)

    def test_expansion(self):
        indices = [self.pool.alloc(i, EMPTY_REF) for i in range(10)]
        self.assertEqual(len(set(indices)), 10)

        stats = self.pool.stats()
        # 4 -> 8 -> 16
        self.assertEqual(stats["capacity"], 16)
        self.assertEqual(stats["active"], 10)
        self.assertEqual(stats["free"], 6)
        for i, idx in enumerate(indices):
            self.assertEqual(self.pool.get(idx)[0], i)

    def test_expansion_is_logged(self):
        with self.assertLogs("linked_stack.memory.allocator", level=logging.DEBUG) as cm:
            self.pool.alloc(0, EMPTY_REF)
        self.assertIn("Test-Pool", cm.output[0])

    def test_stats_after_full_release(self):
        indices = [self.pool.alloc(i, EMPTY_REF) for i in range(6)]
        for idx in indices:
            self.pool.release(idx)
        stats = self.pool.stats()
        self.assertEqual(stats["name"], "Test-Pool")
        self.assertEqual(stats["active"], 0)
        # Creció a 8 slots: al vaciarse vuelve al estado inicial
        self.assertEqual(stats["capacity"], 0)
        self.assertEqual(stats["free"], stats["capacity"])
        self.assertEqual(stats["fragmentation"], 1.0)

    def test_empty_arena_returns_grown_memory(self):
        """Una arena que creció y se vacía devuelve su memoria física y sigue siendo usable."""
        indices = [self.pool.alloc(i, EMPTY_REF) for i in range(100)]
        self.assertEqual(self.pool.stats()["capacity"], 128)
        for idx in indices:
            self.pool.release(idx)
        self.assertEqual(self.pool.stats()["capacity"], 0)

        idx = self.pool.alloc("again", EMPTY_REF)
        self.assertEqual(self.pool.get(idx), ("again", EMPTY_REF))
        self.assertEqual(self.pool.stats()["capacity"], 4)

    def test_single_page_is_kept_when_empty(self):
        """Ciclos push/pop sobre una sola página no reinician la arena."""
        for _ in range(3):
            idx = self.pool.alloc(0, EMPTY_REF)
            self.pool.release(idx)
            self.assertEqual(self.pool.stats()["capacity"], 4)

    def test_default_page_size(self):
        pool = CellPool()
        pool.alloc(0, EMPTY_REF)
        self.assertEqual(pool.stats()["capacity"], DEFAULT_PAGE_SIZE)
        self.assertIs(heap.DEFAULT_PAGE_SIZE, DEFAULT_PAGE_SIZE)

    def test_invalid_page_size(self):
        with self.assertRaises(ValueError):
            CellPool(page_size=0)


if __name__ == '__main__':
    unittest.main()
