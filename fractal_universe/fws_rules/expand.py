"""
Fractal expansion: one substitution step.

Each cell with symbol s is replaced by the 2×2 image rule[s], tiled without
gaps or overlaps, so an H×W grid becomes a 2H×2W grid:

    out[y][x] = rule[grid[y // 2][x // 2]][y % 2][x % 2]

A 2×2 pattern therefore expands to a unique 4×4 block, whose top-left
quadrant is exactly rule[pattern[0][0]].

All operations are pure and total for symbols inside the alphabet.
"""

from typing import List, Sequence

import numpy as np

from fws_core.types import Block, Pattern
from .rule_table import RuleTable


def _as_symbol_array(grid: Sequence[Sequence[int]], rules: RuleTable) -> np.ndarray:
    arr = np.asarray(grid, dtype=np.int64)
    if arr.ndim != 2 or arr.size == 0:
        raise ValueError(f"Grid must be a non-empty 2-D array, got shape {arr.shape}")
    if arr.min() < 0 or arr.max() >= rules.n:
        raise ValueError(
            f"Grid symbols must lie in [0, {rules.n}), got range "
            f"[{arr.min()}, {arr.max()}]"
        )
    return arr


def substitute_grid(grid: Sequence[Sequence[int]], rules: RuleTable) -> List[List[int]]:
    """
    Apply one substitution step to an H×W grid.

    Args:
        grid: H×W symbols
        rules: Rule table

    Returns:
        2H×2W grid as nested lists

    Raises:
        ValueError: If the grid is ragged, empty, or holds symbols outside [0, N)
    """
    arr = _as_symbol_array(grid, rules)
    H, W = arr.shape

    # tiles[r, c, dy, dx] = rule[grid[r][c]][dy][dx]
    tiles = rules.images[arr]

    # Interleave block rows with image rows: (r, dy, c, dx) → (2r+dy, 2c+dx)
    return tiles.transpose(0, 2, 1, 3).reshape(2 * H, 2 * W).tolist()


def expand_pattern(pattern: Pattern, rules: RuleTable) -> Block:
    """
    Expand a 2×2 pattern into its 4×4 block.

    Args:
        pattern: 2×2 symbols
        rules: Rule table

    Returns:
        4×4 block as nested tuples (block[y][x])
    """
    if len(pattern) != 2 or any(len(row) != 2 for row in pattern):
        raise ValueError(f"Pattern must be 2×2, got {pattern!r}")

    block = substitute_grid(pattern, rules)
    return tuple(tuple(row) for row in block)
