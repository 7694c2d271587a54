from __future__ import annotations

from fuzzy_pick.models import MatchResult, RankedCandidate
from fuzzy_pick.ranking import rank_candidates
from fuzzy_pick.search import MAX_LENGTH, compare, fast_check, fold

__version__ = "0.1.0"

__all__ = [
    "MAX_LENGTH",
    "MatchResult",
    "RankedCandidate",
    "__version__",
    "compare",
    "fast_check",
    "fold",
    "rank_candidates",
]
