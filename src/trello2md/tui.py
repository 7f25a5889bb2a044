from __future__ import annotations

import io
import logging
from datetime import date

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.widgets import Footer, Header, Label, Markdown

from .client import TrelloClient
from .config import ExportOptions
from .exceptions import Trello2MdError
from .export import export_boards

logger = logging.getLogger("trello2md.tui")


class ExportViewerApp(App[None]):
    """Renders a board export as Markdown inside the terminal."""

    TITLE = "Trello Export"

    CSS = """
    Screen {
        background: $surface;
    }

    #export-container {
        border: round $accent;
        padding: 0 1;
    }

    #export-status {
        color: $text-muted;
        padding: 1 0;
    }

    .export-status-error {
        color: $error;
        text-style: bold;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
    ]

    def __init__(
        self,
        client: TrelloClient,
        board_ids: list[str],
        list_filter: str,
        options: ExportOptions,
        *,
        today: date | None = None,
    ) -> None:
        super().__init__()
        self._client = client
        self._board_ids = board_ids
        self._list_filter = list_filter
        self._options = options
        self._today = today
        self.exported_markdown = ""
        self.export_error: str | None = None
        self._export_run = 0

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="export-container"):
            yield Label("Exporting...", id="export-status")
            yield Markdown("", id="export-document")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = f"List: {self._list_filter}"
        self._start_export()

    def _start_export(self) -> None:
        # thread workers cannot be cancelled, only the latest run may update the view
        self._export_run += 1
        self._run_export(self._export_run)

    @work(thread=True, exclusive=True)
    def _run_export(self, run: int) -> None:
        buffer = io.StringIO()
        try:
            export_boards(
                self._client,
                self._board_ids,
                self._list_filter,
                self._options,
                buffer,
                today=self._today,
            )
        except Trello2MdError as e:
            logger.error("Export failed: %s", e)
            self.call_from_thread(self._show_error, run, str(e), buffer.getvalue())
            return

        self.call_from_thread(self._show_document, run, buffer.getvalue())

    def _show_document(self, run: int, document: str) -> None:
        if run != self._export_run:
            logger.debug("Dropping result of superseded export run %d", run)
            return
        self.exported_markdown = document
        self.export_error = None
        status = self.query_one("#export-status", Label)
        status.remove_class("export-status-error")
        status.display = False
        self.query_one("#export-document", Markdown).update(document)

    def _show_error(self, run: int, message: str, partial: str) -> None:
        if run != self._export_run:
            logger.debug("Dropping error of superseded export run %d", run)
            return
        # Keep whatever was rendered before the failure visible
        self.exported_markdown = partial
        self.export_error = message
        status = self.query_one("#export-status", Label)
        status.update(f"Error: {message}")
        status.add_class("export-status-error")
        status.display = True
        self.query_one("#export-document", Markdown).update(partial)

    def action_refresh(self) -> None:
        status = self.query_one("#export-status", Label)
        status.update("Exporting...")
        status.remove_class("export-status-error")
        status.display = True
        self._start_export()
