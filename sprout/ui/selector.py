"""Fuzzy selector used by ``sprout add`` and ``sprout open``/``remove`` without arguments."""

from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Input, OptionList
from textual.widgets.option_list import Option

from sprout.exceptions import SelectionCancelledError
from sprout.ui.widgets import SelectorHeader


def fuzzy_score(query: str, text: str) -> Optional[int]:
    """Score a subsequence match of ``query`` in ``text``; None when it does not match.

    Lower is better: contiguous matches near the start win.
    """
    if not query:
        return 0
    query = query.lower()
    text = text.lower()
    pos = -1
    score = 0
    for ch in query:
        found = text.find(ch, pos + 1)
        if found < 0:
            return None
        score += found - pos - 1  # gap since the previous match
        pos = found
    return score + text.find(query[0])


def fuzzy_filter(query: str, items: List[str]) -> List[int]:
    """Indices of ``items`` matching ``query``, best match first, stable on ties."""
    scored = []
    for index, item in enumerate(items):
        score = fuzzy_score(query, item)
        if score is not None:
            scored.append((score, index))
    scored.sort()
    return [index for _, index in scored]


class FuzzySelectApp(App[Optional[int]]):
    """Type to filter, arrows to move, Enter to choose, Esc to cancel."""

    CSS = """
    Screen {
        background: $surface;
    }

    Input {
        margin: 1 0 0 0;
    }

    OptionList {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+c", "cancel", "Cancel", show=False),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("up", "cursor_up", "Up", show=False),
    ]

    def __init__(self, items: List[str], title: str):
        super().__init__()
        self.items = items
        self.title = title
        self.visible: List[int] = list(range(len(items)))

    def compose(self) -> ComposeResult:
        yield SelectorHeader(self.title)
        yield Input(placeholder="Type to filter...", id="query")
        yield OptionList(id="choices")
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_options("")
        self.query_one(Input).focus()

    def _refresh_options(self, query: str) -> None:
        self.visible = fuzzy_filter(query, self.items)
        options = self.query_one(OptionList)
        options.clear_options()
        options.add_options([Option(self.items[i], id=str(i)) for i in self.visible])
        if self.visible:
            options.highlighted = 0
        self.query_one(SelectorHeader).matches = len(self.visible)

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refresh_options(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        options = self.query_one(OptionList)
        if options.highlighted is not None and self.visible:
            self.exit(self.visible[options.highlighted])

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.exit(int(event.option.id))

    def action_cursor_down(self) -> None:
        self.query_one(OptionList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one(OptionList).action_cursor_up()

    def action_cancel(self) -> None:
        self.exit(None)


def select(items: List[str], title: str) -> int:
    """Run the selector and return the chosen index.

    Raises:
        SelectionCancelledError: If the user cancels or there is nothing to choose
    """
    if not items:
        raise SelectionCancelledError()
    result = FuzzySelectApp(items, title).run()
    if result is None:
        raise SelectionCancelledError()
    return result
