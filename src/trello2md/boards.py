"""Board lookup: export target resolution and name search."""

from __future__ import annotations

import logging

from .client import TrelloClient
from .exceptions import NoMatchingListError
from .models import (
    Board,
    Card,
    TrelloList,
    _board_to_model,
    _boards_to_models,
    _cards_to_models,
    _lists_to_models,
)

logger = logging.getLogger("trello2md.boards")


def fetch_board(client: TrelloClient, board_id: str) -> Board:
    raw = client.fetch_board(board_id)
    board = _board_to_model(raw if isinstance(raw, dict) else {})
    # A board without an id in the payload still came from this lookup
    if not board.id:
        board = Board(id=board_id, name=board.name)
    return board


def fetch_boards(client: TrelloClient, board_ids: list[str]) -> list[Board]:
    """Fetch every board up front so a bad id fails before any output."""
    return [fetch_board(client, board_id) for board_id in board_ids]


def find_list(client: TrelloClient, board: Board, list_filter: str) -> TrelloList:
    """Return the first list on `board` named exactly `list_filter`.

    Lists are scanned in API order, so with duplicate names the first one wins.

    Raises:
        NoMatchingListError: If no list has that name.
    """
    lists = _lists_to_models(client.fetch_lists_for_board(board.id))
    for lst in lists:
        if lst.name == list_filter:
            logger.info("Board %s: exporting list %s (%s)", board.name, lst.name, lst.id)
            return lst
    raise NoMatchingListError(board.name, list_filter)


def resolve_export_target(
    client: TrelloClient, board_id: str, list_filter: str
) -> TrelloList:
    """Look up a board by id and locate the list to export.

    Raises:
        NotFoundError: If the board doesn't exist.
        NoMatchingListError: If no list on the board is named `list_filter`.
    """
    return find_list(client, fetch_board(client, board_id), list_filter)


def fetch_sorted_cards(client: TrelloClient, lst: TrelloList) -> list[Card]:
    """Fetch the cards of a list, least recently active first."""
    cards = _cards_to_models(client.fetch_cards_for_list(lst.id))
    cards.sort(key=lambda c: c.last_activity)
    logger.info("List %s: %d card(s)", lst.name, len(cards))
    return cards


def search_boards(client: TrelloClient, name_filter: str) -> list[Board]:
    """Find boards whose name contains `name_filter`, in API order."""
    boards = _boards_to_models(client.search_boards(name_filter))
    logger.info("Board search %r matched %d board(s)", name_filter, len(boards))
    return boards
