"""
Depth bounds of the construction.

With periods A < B < C, the three chains return to a common phase only
every lcm(A, B, C) steps, so the latest word appears at depth
lcm(A, B, C) + 1. Picking three consecutive periods that start at an odd
value makes them pairwise coprime, giving a cubic lower bound in N for the
worst-case first-occurrence depth.
"""

import math
from typing import Tuple

from fws_core.config import ConfigurationError, FractalConfig


def periods_lcm(config: FractalConfig) -> int:
    return math.lcm(config.a, config.b, config.c)


def predicted_word_depth(config: FractalConfig) -> int:
    """Depth at which the construction reveals its latest word."""
    return periods_lcm(config) + 1


def cubic_lower_bound(n: int) -> int:
    """(N−4)(N−5)(N−6) + 1."""
    return (n - 4) * (n - 5) * (n - 6) + 1


def choose_periods(n: int) -> Tuple[int, int, int]:
    """
    Periods (a, a+1, a+2) with a the largest odd value such that a+2 ≤ N−3.

    Returns:
        (A, B, C); for N=10 this is (5, 6, 7)

    Raises:
        ConfigurationError: If N < 8 (no valid triple)
    """
    a = n - 5 if (n - 5) % 2 == 1 else n - 6
    if a < 3:
        raise ConfigurationError(f"No periods 3 <= A < B < C <= N-3 exist for N={n}")
    return a, a + 1, a + 2
