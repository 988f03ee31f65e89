"""Search fan-out, ranking and execution."""

from central_flow.search.aggregator import RankedResult, ResultAggregator, rank_candidates
from central_flow.search.collation import collation_key, compare_titles

__all__ = [
    "RankedResult",
    "ResultAggregator",
    "collation_key",
    "compare_titles",
    "rank_candidates",
]
