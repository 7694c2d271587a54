from __future__ import annotations

from rich.markup import escape
from rich.text import Text

from fuzzy_pick.models import MatchResult

MATCH_STYLE = "bold green"


def match_segments(result: MatchResult) -> list[tuple[str, bool]]:
    """Split the target into alternating runs of matched and unmatched text."""
    matched = set(result.matches)
    segments: list[tuple[str, bool]] = []
    for index, char in enumerate(result.target):
        is_match = index in matched
        if segments and segments[-1][1] == is_match:
            segments[-1] = (segments[-1][0] + char, is_match)
        else:
            segments.append((char, is_match))
    return segments


def render_match(result: MatchResult, *, style: str = MATCH_STYLE) -> Text:
    text = Text(result.target)
    for index in result.matches:
        text.stylize(style, index, index + 1)
    return text


def render_match_markup(result: MatchResult, *, style: str = MATCH_STYLE) -> str:
    parts = []
    for segment, is_match in match_segments(result):
        if is_match:
            parts.append(f"[{style}]{escape(segment)}[/]")
        else:
            parts.append(escape(segment))
    return "".join(parts)


def format_match_status(matched: int, total: int) -> str:
    return f"{matched:,} of {total:,} candidates match."
