"""
Unit tests for fws_search/search.py.

Focus: seed handling, exact first step, append-only maps, parent depth + 1,
cutoffs, witness chains, determinism.
"""

import numpy as np
import pytest

from fws_core.config import ConfigurationError, FractalConfig
from fws_rules.expand import expand_pattern
from fws_rules.features import extract_subpatterns, extract_words
from fws_rules.rule_table import START_PATTERN, build_rule_table
from fws_search.search import (
    SearchState,
    init_search,
    run_search,
    search_step,
    witness_chain,
)
from fws_search.sink import CollectingSink

SMALL = FractalConfig(n=8, a=3, b=4, c=5)


@pytest.fixture(scope="module")
def small_run():
    sink = CollectingSink()
    state, receipt = run_search(SMALL, sink)
    return state, receipt, sink


# =============================================================================
# Test: Initialisation
# =============================================================================

class TestInit:

    def test_seed_at_depth_one(self):
        state = init_search()
        assert state.pattern_depths == {START_PATTERN: 1}
        assert state.word_depths == {}
        assert len(state.frontier) == 1
        assert state.pattern_parents[START_PATTERN] is None

    def test_seed_event(self):
        sink = CollectingSink()
        init_search(START_PATTERN, sink)
        assert sink.events == [("pattern", 1, START_PATTERN)]

    def test_custom_seed(self):
        seed = ((1, 1), (1, 1))
        state = init_search(seed)
        assert state.pattern_depths == {seed: 1}


# =============================================================================
# Test: Single Step
# =============================================================================

class TestSearchStep:

    def test_first_step_records_block_features(self):
        rules = build_rule_table(FractalConfig.default())
        state = init_search()

        depth = search_step(state, rules)

        assert depth == 1
        assert state.steps == 1
        # 9 windows, one duplicate (2,2/2,0 at offsets (0,2) and (2,0))
        assert len(state.pattern_depths) == 1 + 8
        assert state.pattern_depths[((2, 3), (0, 3))] == 2
        assert state.pattern_depths[((0, 0), (0, 0))] == 2
        assert state.word_depths[(0, 0, 2)] == 2
        assert state.word_depths[(0, 0, 3)] == 2
        assert all(d == 2 for d in state.word_depths.values())
        assert len(state.frontier) == 8

    def test_first_step_events(self):
        rules = build_rule_table(FractalConfig.default())
        sink = CollectingSink()
        state = init_search(START_PATTERN, sink)
        search_step(state, rules, sink)

        patterns = sink.of_kind("pattern")
        assert patterns[0] == (1, START_PATTERN)
        assert len(patterns) == 9
        assert len(sink.of_kind("word")) == len(state.word_depths)

    def test_known_pattern_not_requeued(self):
        """The seed reappearing inside a block keeps depth 1 and isn't pushed again."""
        rules = build_rule_table(FractalConfig.default())
        state = SearchState()
        state.record_pattern(((0, 0), (0, 0)), 1, None)

        search_step(state, rules)

        assert state.pattern_depths == {((0, 0), (0, 0)): 1}
        assert state.word_depths == {(0, 0, 0): 2}
        assert len(state.frontier) == 0

    def test_step_on_empty_frontier(self):
        rules = build_rule_table(FractalConfig.default())
        with pytest.raises(IndexError):
            search_step(SearchState(), rules)


class TestRecord:

    def test_record_pattern_append_only(self):
        state = SearchState()
        assert state.record_pattern(START_PATTERN, 1, None) is True
        assert state.record_pattern(START_PATTERN, 5, ((0, 0), (0, 0))) is False
        assert state.pattern_depths[START_PATTERN] == 1
        assert state.pattern_parents[START_PATTERN] is None
        assert len(state.frontier) == 1

    def test_record_word_append_only(self):
        state = SearchState()
        assert state.record_word((1, 2, 3), 4, START_PATTERN) is True
        assert state.record_word((1, 2, 3), 2, START_PATTERN) is False
        assert state.word_depths[(1, 2, 3)] == 4
        assert len(state.frontier) == 0, "Words are never queued"


# =============================================================================
# Test: Full Runs (small alphabet)
# =============================================================================

class TestRunSearch:

    def test_frontier_drains(self, small_run):
        state, receipt, _ = small_run
        assert not state.frontier
        assert receipt.cutoff is None
        assert receipt.steps == receipt.patterns_found, "Every pattern expanded once"

    def test_all_depths_positive(self, small_run):
        state, _, _ = small_run
        assert all(d >= 1 for d in state.pattern_depths.values())
        assert all(d >= 2 for d in state.word_depths.values())
        assert state.pattern_depths[START_PATTERN] == 1

    def test_parent_depth_plus_one(self, small_run):
        state, _, _ = small_run
        rules = build_rule_table(SMALL)
        for pattern, parent in state.pattern_parents.items():
            if parent is None:
                assert pattern == START_PATTERN
                continue
            assert state.pattern_depths[pattern] == state.pattern_depths[parent] + 1
            assert pattern in set(extract_subpatterns(expand_pattern(parent, rules)))
        for word, parent in state.word_parents.items():
            assert state.word_depths[word] == state.pattern_depths[parent] + 1
            assert word in set(extract_words(expand_pattern(parent, rules)))

    def test_events_non_decreasing(self, small_run):
        _, _, sink = small_run
        depths = [depth for kind, depth, _ in sink.events]
        assert depths == sorted(depths)
        assert sink.events[0][0] == "rules"

    def test_each_item_reported_once(self, small_run):
        state, receipt, sink = small_run
        patterns = [p for _, p in sink.of_kind("pattern")]
        words = [w for _, w in sink.of_kind("word")]
        assert len(patterns) == len(set(patterns)) == receipt.patterns_found
        assert len(words) == len(set(words)) == receipt.words_found
        assert {p: d for d, p in sink.of_kind("pattern")} == state.pattern_depths

    def test_receipt_maxima(self, small_run):
        state, receipt, _ = small_run
        assert receipt.max_pattern_depth == max(state.pattern_depths.values())
        assert receipt.max_word_depth == max(state.word_depths.values())

    def test_idempotent(self, small_run):
        state, receipt, _ = small_run
        state2, receipt2 = run_search(SMALL)
        assert state2.pattern_depths == state.pattern_depths
        assert state2.word_depths == state.word_depths
        assert receipt2 == receipt

    def test_invalid_config_emits_nothing(self):
        sink = CollectingSink()
        with pytest.raises(ConfigurationError):
            run_search(FractalConfig(n=8, a=3, b=4, c=6), sink)
        assert sink.events == []

    @pytest.mark.parametrize("start", [
        ((0, 1), (1, 8)),     # symbol N outside the alphabet
        ((0, -1), (1, 2)),
        ((0, 1, 2), (1, 2, 3)),
    ])
    def test_invalid_start_emits_nothing(self, start):
        sink = CollectingSink()
        with pytest.raises(ValueError):
            run_search(SMALL, sink, start=start)
        assert sink.events == [], "No rule dump or seed event before the start is checked"

    def test_start_given_as_lists(self):
        state, _ = run_search(FractalConfig(n=8, a=3, b=4, c=5, max_steps=0), start=[[0, 1], [1, 2]])
        assert state.pattern_depths == {START_PATTERN: 1}


class TestCutoffs:

    def test_max_depth(self):
        config = FractalConfig(n=10, a=5, b=6, c=7, max_depth=3)
        state, receipt = run_search(config)
        assert receipt.cutoff == "max_depth"
        assert receipt.max_pattern_depth == 3
        assert max(state.word_depths.values()) <= 3
        assert all(d <= 3 for d in state.pattern_depths.values())

    def test_max_depth_one_expands_nothing(self):
        config = FractalConfig(n=10, a=5, b=6, c=7, max_depth=1)
        state, receipt = run_search(config)
        assert receipt.steps == 0
        assert receipt.patterns_found == 1
        assert receipt.words_found == 0
        assert receipt.max_word_depth == 0
        assert receipt.cutoff == "max_depth"

    def test_max_steps(self):
        config = FractalConfig(n=10, a=5, b=6, c=7, max_steps=1)
        state, receipt = run_search(config)
        assert receipt.steps == 1
        assert receipt.patterns_found == 9
        assert receipt.cutoff == "max_steps"

    def test_max_steps_zero(self):
        config = FractalConfig(n=10, a=5, b=6, c=7, max_steps=0)
        _, receipt = run_search(config)
        assert receipt.steps == 0
        assert receipt.cutoff == "max_steps"

    def test_depth_prefix_matches_full_run(self, small_run):
        """A depth-capped run agrees with the full run on everything it records."""
        full_state, _, _ = small_run
        capped = FractalConfig(n=8, a=3, b=4, c=5, max_depth=4)
        state, _ = run_search(capped)
        for pattern, depth in state.pattern_depths.items():
            assert full_state.pattern_depths[pattern] == depth
        for word, depth in state.word_depths.items():
            assert full_state.word_depths[word] == depth


# =============================================================================
# Test: Witness Chains
# =============================================================================

class TestWitnessChain:

    def test_seed_chain(self, small_run):
        state, _, _ = small_run
        assert witness_chain(state, START_PATTERN) == [START_PATTERN]

    def test_pattern_chain_length_is_depth(self, small_run):
        state, _, _ = small_run
        rules = build_rule_table(SMALL)
        for pattern, depth in state.pattern_depths.items():
            chain = witness_chain(state, pattern)
            assert len(chain) == depth
            assert chain[0] == START_PATTERN
            assert chain[-1] == pattern
            for parent, child in zip(chain, chain[1:]):
                assert child in set(extract_subpatterns(expand_pattern(parent, rules)))

    def test_word_chain_length(self, small_run):
        state, _, _ = small_run
        for word, depth in state.word_depths.items():
            chain = witness_chain(state, word)
            assert len(chain) == depth - 1
            assert chain[0] == START_PATTERN

    def test_word_with_numpy_symbols(self, small_run):
        """Words built from numpy integers are still treated as words."""
        state, _, _ = small_run
        word, depth = next(iter(state.word_depths.items()))
        np_word = tuple(np.int64(s) for s in word)

        chain = witness_chain(state, np_word)
        assert len(chain) == depth - 1
        assert chain == witness_chain(state, word)

    def test_unknown_numpy_word_reported_as_word(self, small_run):
        state, _, _ = small_run
        with pytest.raises(KeyError, match="Word"):
            witness_chain(state, tuple(np.int64(7) for _ in range(3)))

    def test_unknown_items(self, small_run):
        state, _, _ = small_run
        with pytest.raises(KeyError):
            witness_chain(state, ((7, 7), (7, 7)))
        with pytest.raises(KeyError):
            witness_chain(state, (7, 7, 7))
