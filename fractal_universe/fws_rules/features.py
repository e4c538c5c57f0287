"""
Feature extraction from a 4×4 block.

- Sub-patterns: the 9 overlapping 2×2 windows, top-left offsets (y, x) in [0, 3)²,
  row-major. Duplicates are kept.
- Words: from every cell, for each of the 8 compass directions, the 3 cells
  start, start+d, start+2d. Pairs whose walk leaves the block yield nothing
  (no wraparound, no padding). A 4×4 block has 48 in-bounds walks out of 128.

Both extractors are lazy generators and have no side effects.
"""

from typing import Iterator, Sequence, Tuple

from fws_core.types import Block, Pattern, Word, WORD_LENGTH

BLOCK_SIZE = 4
WINDOW = 2

# (dy, dx) over {-1, 0, 1}² minus (0, 0), dy-major
DIRECTIONS: Tuple[Tuple[int, int], ...] = tuple(
    (dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if dy or dx
)


def _check_block(block: Sequence[Sequence[int]]) -> None:
    if len(block) != BLOCK_SIZE or any(len(row) != BLOCK_SIZE for row in block):
        raise ValueError(
            f"Block must be {BLOCK_SIZE}×{BLOCK_SIZE}, got {len(block)} rows"
        )


def extract_subpatterns(block: Block) -> Iterator[Pattern]:
    """
    Yield all 9 overlapping 2×2 windows of a 4×4 block, row-major by offset.
    """
    _check_block(block)
    last = BLOCK_SIZE - WINDOW + 1
    for y in range(last):
        for x in range(last):
            yield (
                (block[y][x], block[y][x + 1]),
                (block[y + 1][x], block[y + 1][x + 1]),
            )


def word_sites() -> Iterator[Tuple[int, int, int, int]]:
    """
    Yield (y, x, dy, dx) for every walk of 3 cells that stays inside the block.

    Order: direction-major, then start cell row-major.
    """
    reach = WORD_LENGTH - 1
    for dy, dx in DIRECTIONS:
        for y in range(BLOCK_SIZE):
            for x in range(BLOCK_SIZE):
                end_y, end_x = y + reach * dy, x + reach * dx
                # Start and end inside ⇒ every cell between is inside
                if 0 <= end_y < BLOCK_SIZE and 0 <= end_x < BLOCK_SIZE:
                    yield y, x, dy, dx


def extract_words(block: Block) -> Iterator[Word]:
    """
    Yield every in-bounds directional 3-word of a 4×4 block.

    Examples (block with symbols 0..15 row-major):
        (0, 0) along (0, 1) → (0, 1, 2)
        (0, 0) along (1, 1) → (0, 5, 10)
        (0, 3) along (0, 1) → nothing
    """
    _check_block(block)
    for y, x, dy, dx in word_sites():
        yield tuple(block[y + i * dy][x + i * dx] for i in range(WORD_LENGTH))


def extract_features(block: Block) -> Tuple[Iterator[Pattern], Iterator[Word]]:
    """Both feature streams of one block: (sub-patterns, words)."""
    return extract_subpatterns(block), extract_words(block)
