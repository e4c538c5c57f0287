"""
Substitution rules: rule table generation, fractal expansion, feature extraction.

Modules:
- rule_table.py: Symbol → 2×2 image table built from periods A < B < C
- expand.py: One substitution step (2×2 pattern → 4×4 block, or any grid)
- features.py: 2×2 sub-patterns and directional 3-words of a 4×4 block
"""

from .expand import expand_pattern, substitute_grid
from .features import DIRECTIONS, extract_features, extract_subpatterns, extract_words
from .rule_table import START_PATTERN, RuleTable, build_rule_table

__all__ = [
    "DIRECTIONS",
    "RuleTable",
    "START_PATTERN",
    "build_rule_table",
    "expand_pattern",
    "extract_features",
    "extract_subpatterns",
    "extract_words",
    "substitute_grid",
]
