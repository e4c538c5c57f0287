"""
Utility functions for search runs.

Provides:
- Logging setup
- Depth histograms
- Receipt building and saving (JSON)
"""

import json
import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Hashable, Optional

from fws_core.config import FractalConfig
from fws_core.types import Depth

from .bounds import cubic_lower_bound, periods_lcm, predicted_word_depth
from .search import SearchReceipt


def setup_logger(name: str, log_file: Optional[Path] = None, level=logging.INFO) -> logging.Logger:
    """
    Setup logger for a search run.

    Args:
        name: Logger name
        log_file: Optional path to log file
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers = []

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Console handler (stderr; stdout carries the report)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def depth_histogram(table: Dict[Hashable, Depth]) -> Dict[int, int]:
    """Number of first occurrences per depth, sorted by depth."""
    counts = Counter(int(d) for d in table.values())
    return dict(sorted(counts.items()))


def build_receipt(
    config: FractalConfig,
    receipt: SearchReceipt,
    pattern_histogram: Optional[Dict[int, int]] = None,
    word_histogram: Optional[Dict[int, int]] = None,
) -> Dict[str, Any]:
    """
    Build a JSON-serialisable receipt for one run.

    Args:
        config: Configuration the run used
        receipt: SearchReceipt from run_search
        pattern_histogram: Optional depth_histogram of patterns
        word_histogram: Optional depth_histogram of words

    Returns:
        Receipt dictionary
    """
    result = {
        "config": config.to_dict(),
        "timestamp": datetime.now().isoformat(),
        "search": {
            "steps": receipt.steps,
            "patterns_found": receipt.patterns_found,
            "words_found": receipt.words_found,
            "max_pattern_depth": receipt.max_pattern_depth,
            "max_word_depth": receipt.max_word_depth,
            "cutoff": receipt.cutoff,
            "digest": receipt.digest,
        },
        "bounds": {
            "periods_lcm": periods_lcm(config),
            "predicted_word_depth": predicted_word_depth(config),
            "cubic_lower_bound": cubic_lower_bound(config.n),
        },
    }

    # JSON object keys must be strings
    if pattern_histogram is not None:
        result["pattern_histogram"] = {str(d): c for d, c in pattern_histogram.items()}
    if word_histogram is not None:
        result["word_histogram"] = {str(d): c for d, c in word_histogram.items()}

    return result


def save_receipt(receipt: Dict[str, Any], output_dir: Path) -> Path:
    """
    Save receipt to JSON file.

    Args:
        receipt: Receipt dictionary from build_receipt
        output_dir: Directory to save receipt in

    Returns:
        Path of the written file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    cfg = receipt["config"]
    receipt_file = output_dir / f"fws_n{cfg['n']}_a{cfg['a']}_b{cfg['b']}_c{cfg['c']}.json"

    with open(receipt_file, "w") as f:
        json.dump(receipt, f, indent=2)

    return receipt_file
