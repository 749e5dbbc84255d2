"""
Word filtering, letter-mask encoding and the anagram index.

A five-letter word with five distinct letters is reduced to a 26-bit
integer, one bit per letter ('a' is bit 0). Words that share the same
letters share the same mask, so the search only needs one entry per
letter set:

- filter_words keeps words of length 5 with 5 distinct letters.
- encode_word maps such a word to its letter mask.
- AnagramIndex groups words by mask and exposes the sorted unique masks
  plus a reverse lookup from mask to the words that produced it.

Masks are the only thing the search engine sees; words come back in only
when results are rendered.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

WORD_LEN = 5
ALPHABET_SIZE = 26
_ORD_A = ord('a')


def normalize_line(raw: str) -> Optional[str]:
    """Strip and lower-case one input line; None if it is not a plain a-z word."""
    w = raw.strip().lower()
    if not w:
        return None
    for ch in w:
        if not ('a' <= ch <= 'z'):
            return None
    return w


def is_candidate(word: str) -> bool:
    """True when the word has exactly 5 characters, all different."""
    return len(word) == WORD_LEN and len(set(word.lower())) == WORD_LEN


def filter_words(words: Iterable[str]) -> List[str]:
    """Keep only candidate words, preserving input order."""
    return [w for w in words if is_candidate(w)]


def letter_bit(ch: str) -> int:
    o = ord(ch) - _ORD_A
    if 0 <= o < ALPHABET_SIZE:
        return 1 << o
    raise ValueError(f"Unsupported char: {ch!r} (use a-z)")


def encode_word(word: str) -> int:
    """OR one bit per letter into a mask. Order and repeats do not matter."""
    mask = 0
    for ch in word:
        mask |= letter_bit(ch)
    return mask


def popcount(mask: int) -> int:
    return mask.bit_count()


def lowest_bit_index(mask: int) -> int:
    """Position of the least significant set bit (its earliest letter)."""
    return (mask & -mask).bit_length() - 1


def mask_letters(mask: int) -> str:
    """Letters present in a mask, in alphabetical order."""
    out = []
    while mask:
        lsb = mask & -mask
        out.append(chr(_ORD_A + lsb.bit_length() - 1))
        mask ^= lsb
    return ''.join(out)


class AnagramIndex:
    """Words grouped by letter mask.

    Data members:
    - masks: sorted tuple of distinct masks (the search input)
    - groups: mask -> list of words with that letter set, in the order
      they were first seen
    - word_count: number of candidate words indexed (anagrams included)

    Both members are built once and never changed afterwards, so worker
    threads may read them without locking.
    """
    __slots__ = ("masks", "groups", "word_count")

    def __init__(self, pairs: Iterable[Tuple[str, int]]):
        groups: Dict[int, List[str]] = {}
        count = 0
        for word, mask in pairs:
            g = groups.get(mask)
            if g is None:
                g = []
                groups[mask] = g
            g.append(word)
            count += 1
        self.groups: Dict[int, List[str]] = groups
        self.masks: Tuple[int, ...] = tuple(sorted(groups))
        self.word_count: int = count

    def __len__(self) -> int:
        return len(self.masks)

    def __contains__(self, mask: int) -> bool:
        return mask in self.groups

    def words_for(self, mask: int) -> List[str]:
        """Words sharing the given mask; KeyError for an unknown mask."""
        return self.groups[mask]

    def group_size(self, mask: int) -> int:
        return len(self.groups[mask])


def encode_words(words: Iterable[str]) -> List[Tuple[str, int]]:
    """Pair each filtered word with the mask of its lower-cased letters."""
    return [(w, encode_word(w.lower())) for w in words]


def build_index(words: Iterable[str]) -> AnagramIndex:
    """Filter raw words, encode the survivors and group them by mask."""
    return AnagramIndex(encode_words(filter_words(words)))
