# ui.py
from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import (Button, DataTable, Input, Label, LoadingIndicator,
                             Static)

from .rows import TableView


class SearchControls(Static):
    """Widget for the new-query input and button."""
    class QueryEdited(Message):
        def __init__(self, text: str) -> None:
            self.text = text
            super().__init__()

    class SearchRequested(Message):
        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def compose(self) -> ComposeResult:
        yield Label("Enter new query:")
        yield Input(placeholder="Enter new query", max_length=156, id="search-input")
        yield Button("Search", variant="primary")

    def reset(self) -> None:
        search_input = self.query_one(Input)
        search_input.value = ""
        search_input.focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.QueryEdited(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.post_search_message()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_search_message()

    def post_search_message(self) -> None:
        self.post_message(self.SearchRequested(self.query_one(Input).value))


class LoadingPane(Static):
    """Shown while a search is running."""
    def compose(self) -> ComposeResult:
        yield Label(id="loading-label")
        yield LoadingIndicator()

    def show_query(self, query: str) -> None:
        self.query_one("#loading-label", Label).update(f"Searching for '{query}'...")


class ResultsDisplay(DataTable):
    """The main table. Its keys are forwarded to the app's navigator actions."""
    inherit_bindings = False
    BINDINGS = [
        Binding("up,p,ctrl+p", "app.move_cursor(-1)", "Up", show=False),
        Binding("down,n,ctrl+n", "app.move_cursor(1)", "Down", show=False),
        Binding("enter", "app.submit", "Select"),
        Binding("tab", "app.toggle_details", "Details"),
        Binding("b", "app.back", "Back"),
        Binding("s", "app.new_query", "New query"),
        Binding("r", "app.open_reviews", "Reviews"),
        Binding("c", "app.copy_link", "Copy link"),
    ]

    def on_mount(self) -> None:
        self.cursor_type = "row"

    def on_click(self, event: events.Click) -> None:
        # The navigator owns the cursor.
        event.prevent_default()

    def show(self, view: TableView) -> None:
        self.clear(columns=True)
        for column in view.columns:
            self.add_column(column.label, width=column.width)
        for index, row in enumerate(view.rows):
            self.add_row(*row.cells, key=str(index))
        self.focus()

    def sync_cursor(self, row: int) -> None:
        if self.row_count and self.cursor_row != row:
            self.move_cursor(row=row)


class HintBar(Static):
    """The one-line key-binding hint under the table."""
    def show_hint(self, hint: str, style: str) -> None:
        self.update(Text(hint, style=style))


class DetailsPane(Static):
    """Bordered panel with the details of the focused title."""
    def on_mount(self) -> None:
        self.border_title = "Details"

    def update_details(self, text: str, style: str) -> None:
        self.update(Text(text, style=style))
