"""
Turning mask tuples back into words.

A Solution wraps one 5-tuple from the search. Its count is the number of
word combinations it stands for: the product of the anagram group sizes
of its masks. Rendering shows one row per mask, ordered by earliest
letter, as a 26-column letter grid followed by the matching words.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from wordmask import ALPHABET_SIZE, AnagramIndex, lowest_bit_index, mask_letters

EMPTY_CELL = '-'
WORD_SEPARATOR = ' / '


def mask_row(mask: int) -> str:
    """26 characters: the uppercase letter where the bit is set, '-' elsewhere."""
    return ''.join(chr(65 + i) if mask & (1 << i) else EMPTY_CELL for i in range(ALPHABET_SIZE))


class Solution:
    __slots__ = ("masks",)

    def __init__(self, masks: Sequence[int]):
        self.masks: Tuple[int, ...] = tuple(masks)

    def __repr__(self) -> str:
        return f"Solution({', '.join(mask_letters(m) for m in self.display_order())})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Solution):
            return NotImplemented
        return sorted(self.masks) == sorted(other.masks)

    def __hash__(self) -> int:
        return hash(frozenset(self.masks))

    def count(self, index: AnagramIndex) -> int:
        """Word combinations behind this mask combination."""
        total = 1
        for m in self.masks:
            total *= index.group_size(m)
        return total

    def display_order(self) -> List[int]:
        return sorted(self.masks, key=lowest_bit_index)

    def rows(self, index: AnagramIndex) -> List[str]:
        return [f"{mask_row(m)}  {WORD_SEPARATOR.join(index.words_for(m))}" for m in self.display_order()]

    def display(self, index: AnagramIndex) -> str:
        return '\n'.join(self.rows(index))

    def to_dict(self, index: AnagramIndex) -> Dict[str, object]:
        return {
            'count': self.count(index),
            'rows': [
                {'mask': m, 'letters': mask_letters(m), 'words': list(index.words_for(m))}
                for m in self.display_order()
            ],
        }


def materialize(candidates: Iterable[Sequence[int]]) -> List[Solution]:
    """Wrap raw tuples and give them a reproducible order for printing."""
    sols = [Solution(c) for c in candidates]
    sols.sort(key=Solution.display_order)
    return sols


def total_count(solutions: Iterable[Solution], index: AnagramIndex) -> int:
    return sum(s.count(index) for s in solutions)


def format_duration(seconds: float) -> str:
    """Render as '<s>s <ms>ms', truncating like the console report expects."""
    seconds = max(0.0, seconds)
    return f"{int(seconds)}s {int(seconds * 1000) % 1000}ms"
