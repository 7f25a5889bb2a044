"""Custom exceptions for trello2md."""

from __future__ import annotations


class Trello2MdError(Exception):
    """Base exception for trello2md errors."""


class TrelloAPIError(Trello2MdError):
    """A Trello API request failed."""

    def __init__(self, message: str, *, status: int | None = None, detail: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.detail = detail


class AuthError(TrelloAPIError):
    """The API key or token was rejected."""


class NotFoundError(TrelloAPIError):
    """The requested board or card does not exist."""


class TransportError(TrelloAPIError):
    """Network failure or unexpected API response."""


class NoMatchingListError(Trello2MdError):
    """No list on the board has the requested name."""

    def __init__(self, board_name: str, list_filter: str) -> None:
        super().__init__(f"no list named {list_filter!r} found on board {board_name!r}")
        self.board_name = board_name
        self.list_filter = list_filter


class TimestampParseError(Trello2MdError, ValueError):
    """A date field is not a valid RFC3339 timestamp."""

    def __init__(self, value: object) -> None:
        super().__init__(f"invalid RFC3339 timestamp: {value!r}")
        self.value = value
