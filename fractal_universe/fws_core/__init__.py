"""
fws_core: Core primitives for the fractal word search.

Provides:
- types: Symbol, Pattern, Word, Block, Depth and conversion helpers
- config: FractalConfig, ConfigurationError, JSON config loading
- order_hash: Deterministic hashing (SHA-256) for run fingerprints
"""

from .config import ConfigurationError, FractalConfig, load_config
from .order_hash import hash64
from .types import Block, Depth, Pattern, Symbol, Word, format_pattern, format_word

__all__ = [
    "Block",
    "ConfigurationError",
    "Depth",
    "FractalConfig",
    "Pattern",
    "Symbol",
    "Word",
    "format_pattern",
    "format_word",
    "hash64",
    "load_config",
]
