from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from fuzzy_pick import __version__
from fuzzy_pick.candidates import CandidateLoadError, load_candidates
from fuzzy_pick.models import MatchResult, RankedCandidate
from fuzzy_pick.ranking import rank_candidates
from fuzzy_pick.rendering import render_match_markup
from fuzzy_pick.search import MAX_LENGTH, compare
from fuzzy_pick.tui import CandidatePickerTui

__all__ = [
    "CandidatePickerTui",
    "MatchResult",
    "RankedCandidate",
    "cli",
    "compare",
    "run",
]

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"fuzzy-pick {__version__}")
    raise typer.Exit()


def _configure_logging(*, verbose: bool, log_file: Path | None) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname).1s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        filename=str(log_file) if log_file is not None else None,
    )


def _print_matches(ranked: list[RankedCandidate]) -> None:
    console = Console(highlight=False)
    for candidate in ranked:
        console.print(
            f"{candidate.score:>6}  {render_match_markup(candidate.result)}"
        )


cli = typer.Typer(
    add_completion=False,
    help="Pick a name from a list with subsequence matching in a Textual TUI.",
)


@cli.callback(invoke_without_command=True)
def run(
    candidates_file: Path = typer.Argument(
        ...,
        help="Text file with one candidate per line.",
    ),
    query: str = typer.Option(
        "",
        "--query",
        "-q",
        help="Initial query. Starts the picker in filter mode.",
    ),
    max_length: int = typer.Option(
        MAX_LENGTH,
        "--max-length",
        min=1,
        max=65_535,
        envvar="FUZZY_PICK_MAX_LENGTH",
        help="Longest query or candidate, in codepoints, that can match.",
    ),
    print_only: bool = typer.Option(
        False,
        "--print",
        help="Print ranked matches for --query and exit instead of opening the TUI.",
    ),
    no_create: bool = typer.Option(
        False,
        "--no-create",
        help="Hide the option to pick the typed query as a new entry.",
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Write log messages to this file.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug messages.",
    ),
    _version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    _configure_logging(verbose=verbose, log_file=log_file)

    if print_only and not query:
        raise typer.BadParameter("--print requires a non-empty --query.")

    try:
        candidates = load_candidates(candidates_file)
    except CandidateLoadError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    if print_only:
        ranked = rank_candidates(query, candidates, max_length=max_length)
        if not ranked:
            raise typer.Exit(code=1)
        _print_matches(ranked)
        return

    selection = CandidatePickerTui(
        candidates,
        initial_query=query,
        allow_create=not no_create,
        max_length=max_length,
    ).run()
    if selection is None:
        logger.info("Picker closed without a selection")
        raise typer.Exit(code=1)
    typer.echo(selection)


if __name__ == "__main__":
    cli()
