"""
Core type definitions for the fractal word search.

Patterns and words are nested tuples so they compare and hash by value.
Orientation matters: a pattern and its rotation are distinct keys.
"""

from typing import NewType, Sequence, Tuple

# Alphabet element, integer in [0, N)
Symbol = int

# Number of substitution steps before first occurrence (seed = 1)
Depth = NewType("Depth", int)

# 2×2 grid, row-major: ((top_left, top_right), (bottom_left, bottom_right))
Pattern = Tuple[Tuple[int, int], Tuple[int, int]]

# 3 consecutive cells read along one compass direction
Word = Tuple[int, int, int]

# 4×4 expansion of a pattern, Block[y][x]
Block = Tuple[Tuple[int, ...], ...]

WORD_LENGTH = 3


def make_pattern(rows: Sequence[Sequence[int]]) -> Pattern:
    """
    Convert a 2×2 nested sequence into a hashable Pattern.

    Raises:
        ValueError: If rows is not exactly 2×2
    """
    if len(rows) != 2 or any(len(row) != 2 for row in rows):
        raise ValueError(f"Pattern must be 2×2, got {[len(r) for r in rows]}")
    return ((int(rows[0][0]), int(rows[0][1])), (int(rows[1][0]), int(rows[1][1])))


def is_word(item) -> bool:
    """True for a Word, False for a Pattern (patterns hold rows, words hold symbols)."""
    return len(item) == WORD_LENGTH and not isinstance(item[0], (tuple, list))


def format_pattern(pattern: Pattern) -> str:
    """Render as 'tl,tr/bl,br'."""
    (tl, tr), (bl, br) = pattern
    return f"{tl},{tr}/{bl},{br}"


def format_word(word: Word) -> str:
    """Render as space-separated symbols."""
    return " ".join(str(s) for s in word)
