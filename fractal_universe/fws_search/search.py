"""
Depth-ordered discovery search over the fractal tiling.

Goal: the minimal substitution depth at which every reachable 2×2 pattern
and every directional 3-word first appears.

Key principles:
1. Seed: start pattern recorded at depth 1 and pushed to the frontier
2. Step: pop the minimal-depth pattern (depth d), expand to 4×4, extract
   its 9 sub-patterns and its in-bounds words
3. New sub-patterns are recorded at d+1 and pushed; new words are recorded
   at d+1 and never expanded
4. Append-only maps: an entry's depth never changes once recorded
5. Termination: the pattern space is finite (≤ N⁴), so the frontier drains;
   max_depth / max_steps cut the run short, checked once per step

Because the frontier always yields the globally minimal pending depth and
every discovery happens at parent depth + 1, the first recorded depth of
each pattern and word is its minimal depth from the seed.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from fws_core.config import FractalConfig
from fws_core.order_hash import depth_table_hash, hash64
from fws_core.types import Depth, Pattern, Word, is_word, make_pattern
from fws_rules.expand import expand_pattern
from fws_rules.features import extract_features
from fws_rules.rule_table import START_PATTERN, RuleTable, build_rule_table

from .frontier import Frontier
from .sink import ResultsSink

logger = logging.getLogger(__name__)

SEED_DEPTH = Depth(1)


# =============================================================================
# Types
# =============================================================================


@dataclass
class SearchState:
    """
    Mutable search state owned by one run.

    - pattern_depths: Pattern → first discovery depth
    - word_depths: Word → first discovery depth
    - frontier: patterns pending expansion
    - pattern_parents: Pattern → pattern whose expansion first produced it
      (None for the seed)
    - word_parents: Word → pattern whose expansion first produced it
    - steps: number of expansions performed
    """
    pattern_depths: Dict[Pattern, Depth] = field(default_factory=dict)
    word_depths: Dict[Word, Depth] = field(default_factory=dict)
    frontier: Frontier = field(default_factory=Frontier)
    pattern_parents: Dict[Pattern, Optional[Pattern]] = field(default_factory=dict)
    word_parents: Dict[Word, Pattern] = field(default_factory=dict)
    steps: int = 0

    def record_pattern(self, pattern: Pattern, depth: Depth, parent: Optional[Pattern]) -> bool:
        """Insert a pattern on first sight and queue it. Returns True if new."""
        if pattern in self.pattern_depths:
            return False
        self.pattern_depths[pattern] = depth
        self.pattern_parents[pattern] = parent
        self.frontier.push(pattern, depth)
        return True

    def record_word(self, word: Word, depth: Depth, parent: Pattern) -> bool:
        """Insert a word on first sight. Returns True if new."""
        if word in self.word_depths:
            return False
        self.word_depths[word] = depth
        self.word_parents[word] = parent
        return True


@dataclass
class SearchReceipt:
    """
    Summary of one search run.

    digest fingerprints both depth tables, so identical configurations give
    identical digests.
    """
    steps: int                    # Expansions performed
    patterns_found: int           # Distinct patterns recorded (seed included)
    words_found: int              # Distinct words recorded
    max_pattern_depth: int        # Deepest first occurrence of a pattern
    max_word_depth: int           # Deepest first occurrence of a word (0 if none)
    cutoff: Optional[str]         # "max_depth", "max_steps" or None (frontier drained)
    digest: int                   # hash64 of both depth tables


# =============================================================================
# State Machine
# =============================================================================


def init_search(start: Pattern = START_PATTERN, sink: Optional[ResultsSink] = None) -> SearchState:
    """Fresh state with the seed recorded at depth 1 and queued."""
    state = SearchState()
    state.record_pattern(start, SEED_DEPTH, None)
    if sink is not None:
        sink.on_pattern(SEED_DEPTH, start)
    return state


def search_step(state: SearchState, rules: RuleTable, sink: Optional[ResultsSink] = None) -> Depth:
    """
    Expand the minimal-depth pending pattern and record its features.

    Args:
        state: Search state (mutated)
        rules: Rule table
        sink: Optional receiver of discovery events

    Returns:
        Depth of the pattern that was expanded

    Raises:
        IndexError: If the frontier is empty
    """
    pattern, depth = state.frontier.pop()
    child_depth = Depth(depth + 1)

    block = expand_pattern(pattern, rules)
    state.steps += 1

    subpatterns, words = extract_features(block)

    for sub in subpatterns:
        if state.record_pattern(sub, child_depth, pattern) and sink is not None:
            sink.on_pattern(child_depth, sub)

    for word in words:
        if state.record_word(word, child_depth, pattern) and sink is not None:
            sink.on_word(child_depth, word)

    return depth


# =============================================================================
# Main Entry Point
# =============================================================================


def run_search(
    config: FractalConfig,
    sink: Optional[ResultsSink] = None,
    start: Pattern = START_PATTERN,
) -> Tuple[SearchState, SearchReceipt]:
    """
    Build the rule table and run the discovery search to completion or cutoff.

    Args:
        config: N, A, B, C and optional max_depth / max_steps
        sink: Receives the rule-table dump, then discovery events
        start: Seed pattern (default 0,1/1,2)

    Returns:
        (state, receipt)

    Raises:
        ConfigurationError: Before any sink output, if config is invalid
        ValueError: Before any sink output, if start is not a 2×2 pattern
            over [0, N)
    """
    config.validate()
    rules = build_rule_table(config)
    start = _check_start(start, rules)

    logger.info(
        f"Search start: N={config.n} A={config.a} B={config.b} C={config.c} "
        f"max_depth={config.max_depth} max_steps={config.max_steps}"
    )

    if sink is not None:
        sink.on_rule_table(start, rules)

    state = init_search(start, sink)
    cutoff = None
    current_depth = 0

    while state.frontier:
        if config.max_steps is not None and state.steps >= config.max_steps:
            cutoff = "max_steps"
            break
        if config.max_depth is not None and state.frontier.peek_depth() >= config.max_depth:
            cutoff = "max_depth"
            break

        depth = search_step(state, rules, sink)
        if depth > current_depth:
            current_depth = depth
            logger.debug(
                f"Expanding depth {depth}: {len(state.pattern_depths)} patterns, "
                f"{len(state.word_depths)} words, {len(state.frontier)} pending"
            )

    receipt = _build_receipt(state, cutoff)
    logger.info(
        f"Search end: {receipt.steps} steps, {receipt.patterns_found} patterns "
        f"(max depth {receipt.max_pattern_depth}), {receipt.words_found} words "
        f"(max depth {receipt.max_word_depth}), cutoff={cutoff}"
    )
    return state, receipt


def _check_start(start: Pattern, rules: RuleTable) -> Pattern:
    pattern = make_pattern(start)
    if any(not 0 <= s < rules.n for row in pattern for s in row):
        raise ValueError(f"Start pattern {pattern!r} has symbols outside [0, {rules.n})")
    return pattern


def _build_receipt(state: SearchState, cutoff: Optional[str]) -> SearchReceipt:
    digest = hash64([
        depth_table_hash(state.pattern_depths),
        depth_table_hash(state.word_depths),
    ])
    return SearchReceipt(
        steps=state.steps,
        patterns_found=len(state.pattern_depths),
        words_found=len(state.word_depths),
        max_pattern_depth=max(state.pattern_depths.values(), default=0),
        max_word_depth=max(state.word_depths.values(), default=0),
        cutoff=cutoff,
        digest=digest,
    )


# =============================================================================
# Witnesses
# =============================================================================


def witness_chain(state: SearchState, item: Union[Pattern, Word]) -> List[Pattern]:
    """
    Chain of patterns from the seed to the first producer of `item`.

    For a pattern the chain ends with the pattern itself and has length equal
    to its depth. For a word it ends with the pattern whose expansion first
    contained the word, so its length is the word's depth minus one.

    Raises:
        KeyError: If item was never recorded
    """
    if is_word(item):
        if item not in state.word_parents:
            raise KeyError(f"Word {item!r} not recorded")
        current: Optional[Pattern] = state.word_parents[item]
    else:
        if item not in state.pattern_depths:
            raise KeyError(f"Pattern {item!r} not recorded")
        current = item

    chain: List[Pattern] = []
    while current is not None:
        chain.append(current)
        current = state.pattern_parents[current]
    chain.reverse()
    return chain
