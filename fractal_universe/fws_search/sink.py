"""
Results sinks: receivers of rule-table dumps and discovery events.

Events arrive in non-decreasing depth order. The base class ignores
everything; PrintSink writes the plain-text report, CollectingSink keeps
events in memory.
"""

import sys
from typing import List, Optional, TextIO, Tuple

from fws_core.types import Depth, Pattern, Word, format_pattern, format_word
from fws_rules.rule_table import RuleTable


class ResultsSink:
    """No-op sink. Subclasses override the hooks they care about."""

    def on_rule_table(self, start: Pattern, rules: RuleTable) -> None:
        pass

    def on_pattern(self, depth: Depth, pattern: Pattern) -> None:
        pass

    def on_word(self, depth: Depth, word: Word) -> None:
        pass


class PrintSink(ResultsSink):
    """
    Plain-text report:

        Start: 0,1/1,2
        Rule: 0 -> 0,0/0,0
        ...

        Depth 1: First occurrence of pattern 0,1/1,2
        Depth 2: First occurrence of word 2 2 0
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def _write(self, line: str) -> None:
        self.stream.write(line + "\n")

    def on_rule_table(self, start: Pattern, rules: RuleTable) -> None:
        self._write(f"Start: {format_pattern(start)}")
        for line in rules.describe():
            self._write(line)
        self._write("")

    def on_pattern(self, depth: Depth, pattern: Pattern) -> None:
        self._write(f"Depth {depth}: First occurrence of pattern {format_pattern(pattern)}")

    def on_word(self, depth: Depth, word: Word) -> None:
        self._write(f"Depth {depth}: First occurrence of word {format_word(word)}")


class CollectingSink(ResultsSink):
    """
    Keeps every event as (kind, depth, payload).

    kind is "rules" (depth 0, payload (start, rules)), "pattern" or "word".
    """

    def __init__(self):
        self.events: List[Tuple[str, int, object]] = []

    def on_rule_table(self, start: Pattern, rules: RuleTable) -> None:
        self.events.append(("rules", 0, (start, rules)))

    def on_pattern(self, depth: Depth, pattern: Pattern) -> None:
        self.events.append(("pattern", depth, pattern))

    def on_word(self, depth: Depth, word: Word) -> None:
        self.events.append(("word", depth, word))

    def of_kind(self, kind: str) -> List[Tuple[int, object]]:
        return [(depth, payload) for k, depth, payload in self.events if k == kind]
