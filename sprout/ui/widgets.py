"""Custom widgets for the sprout selector."""

from rich.table import Table
from rich.text import Text
from textual.app import RenderResult
from textual.reactive import reactive
from textual.widgets import Static

from sprout.__version__ import __version__


class SelectorHeader(Static):
    """Title bar: prompt and match count on the left, sprout version on the right."""

    DEFAULT_CSS = """
    SelectorHeader {
        height: 1;
        padding: 0 1;
        background: $panel;
        color: $text;
    }
    """

    matches = reactive(0)

    def __init__(self, prompt: str, icon: str = "🌱"):
        super().__init__()
        self.prompt = prompt
        self.icon = icon

    def render(self) -> RenderResult:
        left = Text.assemble((f"{self.icon} {self.prompt}", "bold"), (f"  {self.matches} matches", "dim"))
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_column(justify="right")
        grid.add_row(left, Text(f"sprout v{__version__}", style="dim"))
        return grid
