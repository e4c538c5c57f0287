"""
Configuration constants for the fractal substitution (N, A, B, C).

Constraint: 3 ≤ A < B < C ≤ N−3. Violations are fatal and are raised
before any rule generation or search output.

Provides:
- ConfigurationError: the single domain error
- FractalConfig: validated constants plus optional search cutoffs
- load_config: read constants from a JSON file
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union


class ConfigurationError(ValueError):
    """Raised when N, A, B, C (or the search cutoffs) are invalid."""


@dataclass(frozen=True)
class FractalConfig:
    """
    Alphabet size, rule periods and search cutoffs.

    - n: alphabet size (symbols 0..n-1)
    - a, b, c: cycle lengths of the top-left, top-right and bottom-left chains
    - max_depth: optional depth ceiling (patterns at this depth are not expanded)
    - max_steps: optional expansion budget
    """
    n: int
    a: int
    b: int
    c: int
    max_depth: Optional[int] = None
    max_steps: Optional[int] = None

    @classmethod
    def default(cls) -> "FractalConfig":
        """Reference constants N=10, A=5, B=6, C=7."""
        return cls(n=10, a=5, b=6, c=7)

    @property
    def periods(self) -> tuple:
        return (self.a, self.b, self.c)

    @property
    def marker_b(self) -> int:
        """Symbol injected where the B chain closes."""
        return self.n - 2

    @property
    def marker_c(self) -> int:
        """Symbol injected where the C chain closes."""
        return self.n - 1

    def validate(self) -> "FractalConfig":
        """
        Check 3 ≤ A < B < C ≤ N−3 and the cutoff ranges.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigurationError: On any violated bound
        """
        for name in ("n", "a", "b", "c"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")

        if not (3 <= self.a < self.b < self.c <= self.n - 3):
            raise ConfigurationError(
                f"Require 3 <= A < B < C <= N-3, got N={self.n}, "
                f"A={self.a}, B={self.b}, C={self.c}"
            )

        if self.max_depth is not None and self.max_depth < 1:
            raise ConfigurationError(f"max_depth must be >= 1, got {self.max_depth}")
        if self.max_steps is not None and self.max_steps < 0:
            raise ConfigurationError(f"max_steps must be >= 0, got {self.max_steps}")

        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _read_int(data: Dict[str, Any], key: str, required: bool = True) -> Optional[int]:
    if key not in data or data[key] is None:
        if required:
            raise ConfigurationError(f"Missing config key '{key}'")
        return None
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"Config key '{key}' must be an integer, got {value!r}")
    return value


def load_config(path: Union[str, Path]) -> FractalConfig:
    """
    Load and validate a FractalConfig from a JSON object.

    Expected keys: n, a, b, c; optional max_depth, max_steps.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If keys are missing, mistyped or out of bounds
    """
    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = json.loads(config_file.read_text())
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")

    config = FractalConfig(
        n=_read_int(data, "n"),
        a=_read_int(data, "a"),
        b=_read_int(data, "b"),
        c=_read_int(data, "c"),
        max_depth=_read_int(data, "max_depth", required=False),
        max_steps=_read_int(data, "max_steps", required=False),
    )
    return config.validate()
