"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import MagicMock

import pytest

from trello2md.client import TrelloClient


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")


@pytest.fixture(autouse=True)
def _reset_trello2md_logger() -> Any:
    """Drop handlers installed by setup_logging so they don't outlive a test's streams."""
    yield
    logger = logging.getLogger("trello2md")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def make_card(
    card_id: str = "c1",
    name: str = "Fix bug",
    last_activity: str = "2024-01-05T10:00:00Z",
    desc: str = "Fixed it",
    labels: list[str] | None = None,
) -> dict[str, Any]:
    return {
        "id": card_id,
        "name": name,
        "url": f"https://trello.com/c/{card_id}",
        "desc": desc,
        "labels": [{"id": f"l-{n}", "name": n} for n in labels or []],
        "dateLastActivity": last_activity,
    }


def make_comment(text: str, date: str, author: str = "Ada Lovelace") -> dict[str, Any]:
    return {
        "id": f"a-{date}",
        "type": "commentCard",
        "date": date,
        "memberCreator": {"fullName": author},
        "data": {"text": text},
    }


@pytest.fixture
def client() -> MagicMock:
    """A TrelloClient double serving a single board "B1" with a "Done" list."""
    mock = MagicMock(spec=TrelloClient)
    mock.fetch_board.return_value = {"id": "b1", "name": "B1"}
    mock.fetch_lists_for_board.return_value = [
        {"id": "l0", "name": "Doing"},
        {"id": "l1", "name": "Done"},
    ]
    mock.fetch_cards_for_list.return_value = [make_card()]
    mock.fetch_card_members.return_value = []
    mock.fetch_card_attachments.return_value = []
    mock.fetch_card_checklists.return_value = [
        {
            "id": "cl1",
            "name": "QA",
            "checkItems": [
                {"name": "Test", "state": "complete"},
                {"name": "Deploy", "state": "incomplete"},
            ],
        }
    ]
    mock.fetch_card_actions.return_value = []
    mock.search_boards.return_value = []
    return mock
