"""Data models for Trello entities and converters from raw API payloads."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .exceptions import TimestampParseError

COMMENT_CARD_ACTION = "commentCard"
CHECK_ITEM_COMPLETE = "complete"

_RFC3339_RE = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})[Tt](?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?(?P<offset>[Zz]|[+-]\d{2}:\d{2})"
)


def _parse_trello_datetime(value: Any) -> datetime:
    """
    Parse an RFC3339 timestamp such as '2026-01-11T12:34:56.789Z'.

    Seconds and a timezone designator are required. Fractions of any length
    are accepted and kept to microsecond precision. Anything else raises
    TimestampParseError.
    """
    if not isinstance(value, str):
        raise TimestampParseError(value)
    match = _RFC3339_RE.fullmatch(value)
    if match is None:
        raise TimestampParseError(value)

    fraction = (match["fraction"] or "").ljust(6, "0")[:6]
    offset = "+00:00" if match["offset"] in ("Z", "z") else match["offset"]
    try:
        return datetime.fromisoformat(f"{match['date']}T{match['time']}.{fraction}{offset}")
    except ValueError as e:
        # out-of-range fields, e.g. month 13
        raise TimestampParseError(value) from e


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass(frozen=True, slots=True)
class Board:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class TrelloList:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class Card:
    id: str
    name: str
    url: str
    desc: str
    last_activity: datetime
    labels: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Member:
    id: str
    full_name: str


@dataclass(frozen=True, slots=True)
class CheckItem:
    name: str
    state: str

    @property
    def complete(self) -> bool:
        return self.state == CHECK_ITEM_COMPLETE


@dataclass(frozen=True, slots=True)
class Checklist:
    id: str
    name: str
    check_items: list[CheckItem] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CommentAction:
    id: str
    date: datetime
    author: str
    text: str


@dataclass(frozen=True, slots=True)
class Attachment:
    name: str
    url: str


def _board_to_model(board: dict[str, Any]) -> Board:
    return Board(id=_str(board.get("id")), name=_str(board.get("name")))


def _boards_to_models(boards: Any) -> list[Board]:
    if not isinstance(boards, list):
        return []
    return [_board_to_model(b) for b in boards if isinstance(b, dict)]


def _lists_to_models(lists: Any) -> list[TrelloList]:
    if not isinstance(lists, list):
        return []
    return [
        TrelloList(id=_str(lst.get("id")), name=_str(lst.get("name")))
        for lst in lists
        if isinstance(lst, dict)
    ]


def _cards_to_models(cards: Any) -> list[Card]:
    if not isinstance(cards, list):
        return []

    out: list[Card] = []
    for card in cards:
        if not isinstance(card, dict):
            continue
        labels = card.get("labels") or []
        label_names = [
            _str(label.get("name")) for label in labels if isinstance(label, dict)
        ]
        out.append(
            Card(
                id=_str(card.get("id")),
                name=_str(card.get("name")),
                url=_str(card.get("url")),
                desc=_str(card.get("desc")),
                last_activity=_parse_trello_datetime(card.get("dateLastActivity")),
                labels=label_names,
            )
        )
    return out


def _members_to_models(members: Any) -> list[Member]:
    if not isinstance(members, list):
        return []
    return [
        Member(id=_str(m.get("id")), full_name=_str(m.get("fullName")))
        for m in members
        if isinstance(m, dict)
    ]


def _checklists_to_models(checklists: Any) -> list[Checklist]:
    if not isinstance(checklists, list):
        return []

    out: list[Checklist] = []
    for checklist in checklists:
        if not isinstance(checklist, dict):
            continue
        items = [
            CheckItem(name=_str(item.get("name")), state=_str(item.get("state")))
            for item in checklist.get("checkItems") or []
            if isinstance(item, dict)
        ]
        out.append(
            Checklist(
                id=_str(checklist.get("id")),
                name=_str(checklist.get("name")),
                check_items=items,
            )
        )
    return out


def _actions_to_comments(actions: Any) -> list[CommentAction]:
    """Keep only comment actions, oldest first."""
    if not isinstance(actions, list):
        return []

    comments: list[CommentAction] = []
    for action in actions:
        if not isinstance(action, dict) or action.get("type") != COMMENT_CARD_ACTION:
            continue
        creator = action.get("memberCreator")
        data = action.get("data")
        comments.append(
            CommentAction(
                id=_str(action.get("id")),
                date=_parse_trello_datetime(action.get("date")),
                author=_str(creator.get("fullName")) if isinstance(creator, dict) else "",
                text=_str(data.get("text")) if isinstance(data, dict) else "",
            )
        )
    comments.sort(key=lambda c: c.date)
    return comments


def _attachments_to_models(attachments: Any) -> list[Attachment]:
    if not isinstance(attachments, list):
        return []
    return [
        Attachment(name=_str(a.get("name")), url=_str(a.get("url")))
        for a in attachments
        if isinstance(a, dict)
    ]
