from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

PickerRowKind = Literal["create", "match", "empty"]


@dataclass(frozen=True)
class MatchResult:
    """A successful subsequence match of a query against a candidate.

    ``matches`` holds one codepoint index into ``target`` per query character,
    strictly increasing. ``score`` is always positive.
    """

    score: int
    target: str
    matches: tuple[int, ...]


@dataclass(frozen=True)
class RankedCandidate:
    index: int
    name: str
    result: MatchResult

    @property
    def score(self) -> int:
        return self.result.score


@dataclass(frozen=True)
class PickerRow:
    kind: PickerRowKind
    name: str | None = None
    result: MatchResult | None = None
