"""trello2md package initialization."""

__version__ = "0.1.0"

from .boards import resolve_export_target, search_boards
from .client import TrelloClient
from .config import ExportOptions
from .exceptions import (
    AuthError,
    NoMatchingListError,
    NotFoundError,
    TimestampParseError,
    TransportError,
    Trello2MdError,
    TrelloAPIError,
)
from .export import export_boards
from .render import render_export

__all__ = [
    "AuthError",
    "ExportOptions",
    "NoMatchingListError",
    "NotFoundError",
    "TimestampParseError",
    "TransportError",
    "Trello2MdError",
    "TrelloAPIError",
    "TrelloClient",
    "__version__",
    "export_boards",
    "render_export",
    "resolve_export_target",
    "search_boards",
]
