"""Markdown rendering of exported cards.

Everything is written straight to the output stream as soon as it is known, so
a failing fetch leaves the already-rendered part of the document in place.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TextIO

from .client import TrelloClient
from .config import ExportOptions
from .models import (
    Attachment,
    Board,
    Card,
    Checklist,
    CommentAction,
    _actions_to_comments,
    _attachments_to_models,
    _checklists_to_models,
    _members_to_models,
)

DATE_FORMAT = "%Y-%m-%d"

logger = logging.getLogger("trello2md.render")


def _fmt_date(value: date | datetime) -> str:
    return value.strftime(DATE_FORMAT)


def render_date_header(out: TextIO, today: date) -> None:
    out.write(f"## {_fmt_date(today)}\n")


def render_board_header(out: TextIO, board: Board) -> None:
    out.write(f"### {board.name}\n")


def render_card_title(out: TextIO, card: Card) -> None:
    out.write(f"#### **{_fmt_date(card.last_activity)}** [{card.name}]({card.url})\n")


def render_labels_and_members(client: TrelloClient, out: TextIO, card: Card) -> None:
    out.write("##### ")
    for label in card.labels:
        out.write(f"`{label}` ")

    members = _members_to_models(client.fetch_card_members(card.id))
    names = ", ".join(m.full_name for m in members)
    out.write(f"- **[{names}]**\n")


def render_description(out: TextIO, card: Card) -> None:
    out.write(f"{card.desc}\n\n")


def render_attachment(out: TextIO, attachment: Attachment) -> None:
    out.write(f"[{attachment.name}]({attachment.url})\n")
    out.write(f"![]({attachment.url})\n\n")


def render_checklist(out: TextIO, checklist: Checklist) -> None:
    out.write(f"{checklist.name}\n")
    for item in checklist.check_items:
        mark = "x" if item.complete else " "
        out.write(f"- [{mark}] {item.name}\n")
    out.write("\n")


def render_comment(out: TextIO, comment: CommentAction) -> None:
    out.write(f"> **{_fmt_date(comment.date)}** - **{comment.author}:**\n")
    body = comment.text.replace("\n", "\n> ")
    out.write(f"> {body}\n\n")


def render_card(
    client: TrelloClient, card: Card, options: ExportOptions, out: TextIO
) -> None:
    """Render one card, fetching only the sections that are switched on."""
    logger.debug("Rendering card %s (%s)", card.name, card.id)
    render_card_title(out, card)

    if options.show_labels_and_members:
        render_labels_and_members(client, out, card)

    if options.show_description:
        render_description(out, card)

    if options.show_attachments:
        for attachment in _attachments_to_models(client.fetch_card_attachments(card.id)):
            render_attachment(out, attachment)

    if options.show_checklists:
        for checklist in _checklists_to_models(client.fetch_card_checklists(card.id)):
            render_checklist(out, checklist)

    if options.show_comments:
        for comment in _actions_to_comments(client.fetch_card_actions(card.id)):
            render_comment(out, comment)


def render_export(
    client: TrelloClient, cards: list[Card], options: ExportOptions, out: TextIO
) -> None:
    """Render cards in the order given, flushing after each one."""
    for card in cards:
        render_card(client, card, options, out)
        out.flush()
