from __future__ import annotations

import logging
from collections.abc import Iterable

from fuzzy_pick.models import RankedCandidate
from fuzzy_pick.search import MAX_LENGTH, compare

logger = logging.getLogger(__name__)


def rank_candidates(
    query: str,
    candidates: Iterable[str],
    *,
    max_length: int = MAX_LENGTH,
) -> list[RankedCandidate]:
    """Score every candidate against ``query``, best first.

    Candidates without a match are dropped. Candidates with equal scores keep
    their input order.
    """
    if not query:
        return []

    names = list(candidates)
    ranked: list[RankedCandidate] = []
    for index, name in enumerate(names):
        result = compare(query, name, max_length=max_length)
        if result is not None:
            ranked.append(RankedCandidate(index=index, name=name, result=result))

    ranked.sort(key=lambda candidate: candidate.score, reverse=True)
    logger.debug(
        "Ranked %d of %d candidates for query %r", len(ranked), len(names), query
    )
    return ranked
