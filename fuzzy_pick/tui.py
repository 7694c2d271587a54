from __future__ import annotations

import logging
from collections.abc import Iterable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.events import Key, Paste
from textual.widgets import OptionList, Static

from fuzzy_pick.models import PickerRow, RankedCandidate
from fuzzy_pick.ranking import rank_candidates
from fuzzy_pick.rendering import format_match_status, render_match
from fuzzy_pick.search import MAX_LENGTH

logger = logging.getLogger(__name__)


class CandidatePickerTui(App[str | None]):
    CSS_PATH = "picker.tcss"
    ENABLE_COMMAND_PALETTE = False
    CREATE_LABEL = "Create new: "
    EMPTY_LABEL = "No candidates match"
    BINDINGS = [
        Binding("f", "filter_key_f", "Filter"),
        Binding("slash", "filter_key_slash", show=False),
        Binding("escape", "escape", "Back", show=False),
        Binding("q", "quit_or_type_q", "Quit"),
        Binding("ctrl+c", "quit", show=False),
    ]

    def __init__(
        self,
        candidates: Iterable[str],
        *,
        initial_query: str = "",
        allow_create: bool = True,
        max_length: int = MAX_LENGTH,
    ) -> None:
        super().__init__()
        self.theme = "rose-pine"
        self._candidates: list[str] = list(candidates)
        self._candidate_names: set[str] = set(self._candidates)
        self._allow_create = allow_create
        self._max_length = max_length
        self._search_query = initial_query
        self._filter_mode = bool(initial_query)
        self._ranked: list[RankedCandidate] = []
        self._rows: list[PickerRow] = []

    def compose(self) -> ComposeResult:
        with Vertical(id="picker"):
            yield Static("Candidates", id="picker-title")
            yield OptionList(id="candidate-list")
            yield Static("", id="status")

    def on_mount(self) -> None:
        self.query_one("#candidate-list", OptionList).focus()
        self._filter_candidates()
        self._update_filter_indicator()

    def _build_rows(self) -> list[PickerRow]:
        query = self._search_query.strip()
        if not self._filter_mode or not query:
            self._ranked = []
            return [
                PickerRow(kind="match", name=name) for name in self._candidates
            ] or [PickerRow(kind="empty")]

        self._ranked = rank_candidates(
            query,
            self._candidates,
            max_length=self._max_length,
        )
        rows: list[PickerRow] = []
        if self._allow_create and query not in self._candidate_names:
            rows.append(PickerRow(kind="create", name=query))
        rows.extend(
            PickerRow(kind="match", name=candidate.name, result=candidate.result)
            for candidate in self._ranked
        )
        return rows or [PickerRow(kind="empty")]

    def _format_row_label(self, row: PickerRow) -> Text:
        if row.kind == "create":
            return Text.assemble(
                (self.CREATE_LABEL, "dim"), (row.name or "", "bold white")
            )
        if row.kind == "match" and row.result is not None:
            return render_match(row.result)
        if row.kind == "match":
            return Text(row.name or "")
        return Text(self.EMPTY_LABEL, style="dim")

    def _render_candidate_options(self) -> None:
        option_list = self.query_one("#candidate-list", OptionList)
        option_list.clear_options()
        option_list.add_options([self._format_row_label(row) for row in self._rows])
        option_list.action_first()

    def _filter_candidates(self) -> None:
        self._rows = self._build_rows()
        self._render_candidate_options()
        self._update_status()

    def _update_status(self) -> None:
        if self._filter_mode and self._search_query.strip():
            message = format_match_status(len(self._ranked), len(self._candidates))
        else:
            message = f"{len(self._candidates):,} candidates. Press f to filter."
        self.query_one("#status", Static).update(message)

    def _filter_indicator_text(self) -> Text:
        indicator = Text()
        if self._filter_mode:
            indicator.append("f", style="bold red")
            indicator.append(f" {self._search_query}_", style="bold white")
        else:
            indicator.append("filter", style="dim")
            indicator.stylize("bold red", 0, 1)
        return indicator

    def _update_filter_indicator(self) -> None:
        picker = self.query_one("#picker", Vertical)
        picker.styles.border_title_align = "left"
        picker.border_title = self._filter_indicator_text()

    def _set_filter_mode(self, enabled: bool, *, reset_query: bool) -> None:
        self._filter_mode = enabled
        if reset_query:
            self._search_query = ""
        self._filter_candidates()
        self._update_filter_indicator()

    def _append_filter_char(self, char: str) -> None:
        self._search_query += char
        self._filter_candidates()
        self._update_filter_indicator()

    def _delete_filter_char(self) -> None:
        self._search_query = self._search_query[:-1]
        self._filter_candidates()
        self._update_filter_indicator()

    def _select_row(self, row: PickerRow) -> None:
        if row.kind == "empty" or row.name is None:
            return
        logger.info("Selected %s candidate %r", row.kind, row.name)
        self.exit(row.name)

    def action_filter_key_f(self) -> None:
        if not self._filter_mode:
            self._set_filter_mode(True, reset_query=True)
            return
        self._append_filter_char("f")

    def action_filter_key_slash(self) -> None:
        if not self._filter_mode:
            self._set_filter_mode(True, reset_query=True)
            return
        self._append_filter_char("/")

    def action_quit_or_type_q(self) -> None:
        if self._filter_mode:
            self._append_filter_char("q")
            return
        self.exit()

    def action_escape(self) -> None:
        if self._filter_mode:
            self._set_filter_mode(False, reset_query=True)
            return
        self.exit()

    def on_key(self, event: Key) -> None:
        if not self._filter_mode:
            return

        # These keys are handled by explicit bindings to avoid duplicate input.
        if event.key in {"f", "slash", "q"}:
            return

        if event.key == "backspace":
            self._delete_filter_char()
            event.stop()
            return

        if event.key == "space":
            self._append_filter_char(" ")
            event.stop()
            return

        if event.character and event.character.isprintable():
            self._append_filter_char(event.character)
            event.stop()
            return

    def on_paste(self, event: Paste) -> None:
        sanitized = event.text.replace("\r", "").replace("\n", "")
        if not sanitized:
            return
        if not self._filter_mode:
            self._filter_mode = True
            self._search_query = ""
        self._append_filter_char(sanitized)
        event.stop()

    def on_option_list_option_selected(
        self, event: OptionList.OptionSelected
    ) -> None:
        if event.option_list.id != "candidate-list":
            return
        if event.option_index < 0 or event.option_index >= len(self._rows):
            return
        self._select_row(self._rows[event.option_index])
