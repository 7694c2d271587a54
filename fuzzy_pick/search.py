from __future__ import annotations

from array import array

from fuzzy_pick.models import MatchResult

MAX_LENGTH = 1000

# Unsigned 64-bit item type for the score tables.
_TABLE_TYPECODE = "Q"
_TABLE_ITEM_LIMIT = 2 ** (8 * array(_TABLE_TYPECODE).itemsize)


def fold(text: str) -> str:
    """Case-fold ``text``; the result may contain more codepoints than the input."""
    return text.casefold()


def fast_check(query: str, candidate: str) -> bool:
    """Check that ``query`` is contained non-contiguously in ``candidate`` in O(n+m)."""
    if len(query) > len(candidate):
        return False

    cursor = 0
    for char in query:
        while cursor < len(candidate) and candidate[cursor] != char:
            cursor += 1
        if cursor >= len(candidate):
            return False
        cursor += 1

    return True


def compare(
    query: str, candidate: str, *, max_length: int = MAX_LENGTH
) -> MatchResult | None:
    """Search for ``query`` in ``candidate``.

    The comparison is case-insensitive and ``query`` does not have to be
    contained in ``candidate`` contiguously, but its characters have to
    appear in the same order. Every character of ``query`` has to be present
    for a match.

    The score is higher for longer contiguous sections of ``query`` in
    ``candidate``, so ``compare("oo", "boot")`` scores higher than
    ``compare("oo", "ovo")``.

    Returns ``None`` if either string is empty, either folded string is
    longer than ``max_length``, or there is no match.
    """
    if not query or not candidate:
        return None

    folded_query = fold(query)
    folded_candidate = fold(candidate)
    if len(folded_query) > max_length or len(folded_candidate) > max_length:
        return None

    if not fast_check(folded_query, folded_candidate):
        return None

    scores, runs = _score_tables(folded_query, folded_candidate)
    score = scores[-1]
    if score == 0:
        return None

    matches = _backtrack(
        scores, runs, len(folded_query), len(folded_candidate)
    )

    # Keep the original casing unless folding changed the codepoint count.
    if len(folded_candidate) != len(candidate):
        target = folded_candidate
    else:
        target = candidate

    return MatchResult(score=score, target=target, matches=tuple(matches))


def _score_tables(query: str, candidate: str) -> tuple[array, array]:
    """Fill the best-score and run-length tables in O(n*m)."""
    # A single contiguous run of the shorter string is the highest score.
    longest_run = min(len(query), len(candidate))
    assert longest_run * (longest_run + 1) // 2 < _TABLE_ITEM_LIMIT, (
        "score table item type too narrow for input length"
    )

    width = len(candidate) + 1
    size = (len(query) + 1) * width
    scores = array(_TABLE_TYPECODE, [0]) * size
    runs = array(_TABLE_TYPECODE, [0]) * size

    for query_index, query_char in enumerate(query):
        row = query_index * width
        next_row = row + width
        for candidate_index, candidate_char in enumerate(candidate):
            diagonal = row + candidate_index
            left = next_row + candidate_index
            cell = left + 1
            if query_char != candidate_char:
                extend = 0
            else:
                extend = scores[diagonal] + 1 + runs[diagonal]

            if extend < scores[left]:
                scores[cell] = scores[left]
                runs[cell] = 0
            elif scores[diagonal] == 0 and query_index > 0:
                scores[cell] = 0
                runs[cell] = 0
            else:
                scores[cell] = extend
                runs[cell] = runs[diagonal] + 1

    return scores, runs


def _backtrack(
    scores: array, runs: array, query_length: int, candidate_length: int
) -> list[int]:
    """Collect the matched candidate positions in O(n+m)."""
    width = candidate_length + 1
    matches = [0] * query_length
    cursor = candidate_length
    for row in range(query_length, 0, -1):
        index = row * width + cursor
        # Skip cells not ending a run, and ties that would not split the
        # run already fixed for the next query character.
        while runs[index] == 0 or (
            cursor > 1
            and scores[index - 1] == scores[index]
            and (row == query_length or matches[row] != cursor)
        ):
            cursor -= 1
            index -= 1
        cursor -= 1
        matches[row - 1] = cursor

    return matches
