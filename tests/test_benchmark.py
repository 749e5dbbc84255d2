import unittest

from benchmark import run_benchmark
from wordmask import build_index

WORDS = ['abcde', 'fghij', 'klmno', 'pqrst', 'uvwxy', 'vwxyz', 'zyabc', 'bcdfg']


class TestBenchmark(unittest.TestCase):
    def test_rows_per_configuration(self):
        index = build_index(WORDS)
        rows = run_benchmark(index.masks, [2], repeat=1, chunksize=2)
        self.assertEqual([(r['executor'], r['workers']) for r in rows],
                         [('serial', 1), ('thread', 2), ('process', 2)])
        for r in rows:
            self.assertEqual(r['tuples'], 2)
            self.assertLessEqual(r['min_ms'], r['max_ms'])


if __name__ == '__main__':
    unittest.main()
