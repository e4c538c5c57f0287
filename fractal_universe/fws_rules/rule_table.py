"""
Rule table generation from periods A < B < C.

Each symbol s maps to a 2×2 image. Three slots carry self-incrementing
chains that wrap back to symbol 1:
- top-left:    1 → 2 → ... → A → 1      (cycle length A)
- top-right:   1 → 2 → ... → B → 1      (cycle length B)
- bottom-left: 1 → 2 → ... → C → 1      (cycle length C)

Bottom-right is 0 except at the chain closures of B and C, which inject the
marker symbols N−2 and N−1. Symbol 0 maps to the all-zero image, and so does
every symbol with no explicit rule (0 is the absorbing background).
"""

from dataclasses import dataclass
from typing import List

import numpy as np

from fws_core.config import FractalConfig
from fws_core.types import Pattern, Symbol, format_pattern, make_pattern

# Seed pattern for the search
START_PATTERN: Pattern = ((0, 1), (1, 2))


@dataclass(frozen=True, eq=False)
class RuleTable:
    """
    Immutable Symbol → Pattern substitution table.

    images[s] is the 2×2 image of symbol s, shape (n, 2, 2), read-only.
    """
    n: int
    images: np.ndarray

    def image(self, symbol: Symbol) -> Pattern:
        """Substitution image of one symbol as a hashable Pattern."""
        if not 0 <= symbol < self.n:
            raise ValueError(f"Symbol {symbol} outside alphabet [0, {self.n})")
        return make_pattern(self.images[symbol].tolist())

    def as_patterns(self) -> List[Pattern]:
        """All images in symbol order."""
        return [make_pattern(img) for img in self.images.tolist()]

    def describe(self) -> List[str]:
        """One 'Rule: s -> tl,tr/bl,br' line per symbol."""
        return [f"Rule: {s} -> {format_pattern(p)}" for s, p in enumerate(self.as_patterns())]

    def __eq__(self, other) -> bool:
        if not isinstance(other, RuleTable):
            return NotImplemented
        return self.n == other.n and np.array_equal(self.images, other.images)

    __hash__ = None


def build_rule_table(config: FractalConfig) -> RuleTable:
    """
    Build the substitution table for (N, A, B, C).

    Args:
        config: Alphabet size and periods (validated here)

    Returns:
        RuleTable of size N

    Raises:
        ConfigurationError: If 3 ≤ A < B < C ≤ N−3 is violated

    Example (N=10, A=5, B=6, C=7):
        rule[5] = 1,6/6,0   (top-left chain wraps)
        rule[6] = 0,1/7,8   (top-right chain wraps, marker N−2)
        rule[7] = 0,0/1,9   (bottom-left chain wraps, marker N−1)
    """
    config.validate()
    n, a, b, c = config.n, config.a, config.b, config.c

    images = np.zeros((n, 2, 2), dtype=np.int64)

    # Chains: rule[i] slot = i + 1
    images[1:a, 0, 0] = np.arange(2, a + 1)
    images[1:b, 0, 1] = np.arange(2, b + 1)
    images[1:c, 1, 0] = np.arange(2, c + 1)

    # Chain closures back to symbol 1
    images[a, 0, 0] = 1
    images[b, 0, 1] = 1
    images[c, 1, 0] = 1

    # Markers at the B and C closures
    images[b, 1, 1] = config.marker_b
    images[c, 1, 1] = config.marker_c

    images.setflags(write=False)
    return RuleTable(n=n, images=images)
