"""
Depth-ordered discovery search over the fractal tiling.

Modules:
- frontier.py: Min-depth priority queue of pending patterns
- search.py: SearchState, search step, run_search, witness chains
- sink.py: Results sinks (print, collect)
- bounds.py: lcm-based depth prediction and period choice
- utils.py: Logging setup, histograms, JSON receipts
- cli.py: fractal-word-search entry point
- sweep.py: Run-twice sweep over alphabet sizes (fractal-word-sweep)
"""

from .bounds import choose_periods, cubic_lower_bound, periods_lcm, predicted_word_depth
from .frontier import Frontier
from .search import SearchReceipt, SearchState, init_search, run_search, search_step, witness_chain
from .sink import CollectingSink, PrintSink, ResultsSink

__all__ = [
    "CollectingSink",
    "Frontier",
    "PrintSink",
    "ResultsSink",
    "SearchReceipt",
    "SearchState",
    "choose_periods",
    "cubic_lower_bound",
    "init_search",
    "periods_lcm",
    "predicted_word_depth",
    "run_search",
    "search_step",
    "witness_chain",
]
