"""Whole-document export across boards."""

from __future__ import annotations

import logging
from datetime import date
from typing import TextIO

from .boards import fetch_boards, fetch_sorted_cards, find_list
from .client import TrelloClient
from .config import ExportOptions
from .render import render_board_header, render_date_header, render_export

logger = logging.getLogger("trello2md.export")


def export_boards(
    client: TrelloClient,
    board_ids: list[str],
    list_filter: str,
    options: ExportOptions,
    out: TextIO,
    *,
    today: date | None = None,
) -> None:
    """Write the Markdown export of `list_filter` on each board to `out`.

    Any error propagates immediately; whatever was written before it stays.
    """
    render_date_header(out, today or date.today())

    boards = fetch_boards(client, board_ids)
    for board in boards:
        render_board_header(out, board)
        lst = find_list(client, board, list_filter)
        cards = fetch_sorted_cards(client, lst)
        render_export(client, cards, options, out)

    logger.info("Exported list %r from %d board(s)", list_filter, len(boards))
