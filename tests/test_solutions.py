import unittest

from search import solve_serial
from solutions import Solution, format_duration, mask_row, materialize, total_count
from wordmask import build_index, encode_word

WORDS = ['abcde', 'edcba', 'fghij', 'klmno', 'pqrst', 'uvwxy', 'zyabc']


class TestMaterializer(unittest.TestCase):
    def setUp(self):
        self.index = build_index(list(WORDS))
        self.solutions = materialize(solve_serial(self.index.masks))

    def test_count_multiplies_group_sizes(self):
        self.assertEqual(len(self.solutions), 1)
        self.assertEqual(self.solutions[0].count(self.index), 2)
        self.assertEqual(total_count(self.solutions, self.index), 2)

    def test_cross_product_count(self):
        index = build_index(WORDS + ['jihgf', 'ghijf', 'tsrqp'])
        sols = materialize(solve_serial(index.masks))
        self.assertEqual([s.count(index) for s in sols], [2 * 3 * 1 * 2 * 1])
        self.assertEqual(total_count(sols, index), 12)

    def test_total_is_sum_of_products(self):
        words = ['abcde', 'edcba', 'fghij', 'klmno', 'pqrst', 'uvwxy',
                 'vwxyz', 'zyxwv', 'bcdea']
        index = build_index(words)
        sols = materialize(solve_serial(index.masks))
        # {a-e, f-j, k-o, p-t} plus either u-y or v-z
        self.assertEqual(len(sols), 2)
        self.assertEqual(sorted(s.count(index) for s in sols), [3, 6])
        self.assertEqual(total_count(sols, index), 9)

    def test_rows(self):
        rows = self.solutions[0].rows(self.index)
        self.assertEqual(rows, [
            'ABCDE---------------------  abcde / edcba',
            '-----FGHIJ----------------  fghij',
            '----------KLMNO-----------  klmno',
            '---------------PQRST------  pqrst',
            '--------------------UVWXY-  uvwxy',
        ])
        self.assertEqual(self.solutions[0].display(self.index), '\n'.join(rows))

    def test_display_order_by_first_letter(self):
        masks = [encode_word(w) for w in ('uvwxy', 'klmno', 'abcde', 'pqrst', 'fghij')]
        sol = Solution(masks)
        self.assertEqual(sol.display_order(), sorted(masks))

    def test_mask_row(self):
        self.assertEqual(mask_row(encode_word('azbyc')), 'ABC---------------------YZ')
        self.assertEqual(len(mask_row(0)), 26)

    def test_equality_ignores_pick_order(self):
        masks = [encode_word(w) for w in ('abcde', 'fghij', 'klmno', 'pqrst', 'uvwxy')]
        self.assertEqual(Solution(masks), Solution(list(reversed(masks))))
        self.assertEqual(len({Solution(masks), Solution(list(reversed(masks)))}), 1)

    def test_to_dict(self):
        d = self.solutions[0].to_dict(self.index)
        self.assertEqual(d['count'], 2)
        self.assertEqual(d['rows'][0]['letters'], 'abcde')
        self.assertEqual(d['rows'][0]['words'], ['abcde', 'edcba'])
        self.assertEqual([r['letters'] for r in d['rows']], ['abcde', 'fghij', 'klmno', 'pqrst', 'uvwxy'])

    def test_materialize_sorted(self):
        a = [encode_word(w) for w in ('abcde', 'fghij', 'klmno', 'pqrst', 'vwxyz')]
        b = [encode_word(w) for w in ('abcde', 'fghij', 'klmno', 'pqrst', 'uvwxy')]
        sols = materialize([tuple(a), tuple(b)])
        self.assertEqual([s.display_order()[-1] for s in sols], [encode_word('uvwxy'), encode_word('vwxyz')])


class TestFormatDuration(unittest.TestCase):
    def test_format(self):
        self.assertEqual(format_duration(0), '0s 0ms')
        self.assertEqual(format_duration(1.2345), '1s 234ms')
        self.assertEqual(format_duration(61.0009), '61s 0ms')

    def test_truncates_instead_of_rounding(self):
        self.assertEqual(format_duration(0.9999996), '0s 999ms')
        self.assertEqual(format_duration(2.0019999), '2s 1ms')
        self.assertEqual(format_duration(-0.5), '0s 0ms')


if __name__ == '__main__':
    unittest.main()
