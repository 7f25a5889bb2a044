"""Unit tests for the Markdown renderer."""

from __future__ import annotations

import io
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from conftest import make_comment
from trello2md.config import ExportOptions
from trello2md.exceptions import TimestampParseError, TransportError
from trello2md.models import Card, CommentAction
from trello2md.render import render_card, render_comment, render_export


@pytest.fixture
def card() -> Card:
    return Card(
        id="c1",
        name="Fix bug",
        url="https://trello.com/c/c1",
        desc="Fixed it",
        last_activity=datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc),
    )


def _render(client: MagicMock, card: Card, options: ExportOptions) -> str:
    out = io.StringIO()
    render_card(client, card, options, out)
    return out.getvalue()


@pytest.mark.unit
class TestRenderCard:
    """Tests for render_card."""

    def test_all_sections(self, client: MagicMock, card: Card) -> None:
        assert _render(client, card, ExportOptions.all()) == (
            "#### **2024-01-05** [Fix bug](https://trello.com/c/c1)\n"
            "##### - **[]**\n"
            "Fixed it\n"
            "\n"
            "QA\n"
            "- [x] Test\n"
            "- [ ] Deploy\n"
            "\n"
        )

    def test_all_toggles_off_renders_title_only(self, client: MagicMock, card: Card) -> None:
        assert _render(client, card, ExportOptions()) == (
            "#### **2024-01-05** [Fix bug](https://trello.com/c/c1)\n"
        )
        client.fetch_card_members.assert_not_called()
        client.fetch_card_checklists.assert_not_called()
        client.fetch_card_actions.assert_not_called()
        client.fetch_card_attachments.assert_not_called()

    def test_title_uses_date_in_card_offset(self, client: MagicMock) -> None:
        late = Card(
            id="c2",
            name="Late",
            url="u",
            desc="",
            last_activity=datetime.fromisoformat("2024-01-05T23:30:00-05:00"),
        )

        assert _render(client, late, ExportOptions()).startswith("#### **2024-01-05** [Late](u)")

    def test_labels_and_members(self, client: MagicMock, card: Card) -> None:
        labelled = Card(
            id=card.id,
            name=card.name,
            url=card.url,
            desc=card.desc,
            last_activity=card.last_activity,
            labels=["bug", "urgent"],
        )
        client.fetch_card_members.return_value = [
            {"id": "m1", "fullName": "Ada Lovelace"},
            {"id": "m2", "fullName": "Grace Hopper"},
        ]

        output = _render(client, labelled, ExportOptions(show_labels_and_members=True))

        assert output.splitlines()[1] == "##### `bug` `urgent` - **[Ada Lovelace, Grace Hopper]**"
        client.fetch_card_members.assert_called_once_with("c1")

    def test_attachments(self, client: MagicMock, card: Card) -> None:
        client.fetch_card_attachments.return_value = [
            {"id": "a1", "name": "screenshot.png", "url": "https://example.com/s.png"},
        ]

        output = _render(client, card, ExportOptions(show_attachments=True))

        assert output.endswith(
            "[screenshot.png](https://example.com/s.png)\n"
            "![](https://example.com/s.png)\n"
            "\n"
        )

    def test_section_order(self, client: MagicMock, card: Card) -> None:
        """Description, attachments, checklists, comments, in that order."""
        client.fetch_card_attachments.return_value = [{"name": "att", "url": "https://a"}]
        client.fetch_card_actions.return_value = [
            make_comment("looks good", "2024-01-05T11:00:00Z"),
        ]

        output = _render(client, card, ExportOptions.all())

        positions = [
            output.index("##### "),
            output.index("Fixed it"),
            output.index("[att](https://a)"),
            output.index("QA\n"),
            output.index("> **2024-01-05**"),
        ]
        assert positions == sorted(positions)

    def test_member_fetch_failure_aborts(self, client: MagicMock, card: Card) -> None:
        client.fetch_card_members.side_effect = TransportError("boom")
        out = io.StringIO()

        with pytest.raises(TransportError):
            render_card(client, card, ExportOptions.all(), out)

        # title and label prefix were already streamed
        assert out.getvalue() == "#### **2024-01-05** [Fix bug](https://trello.com/c/c1)\n##### "
        client.fetch_card_checklists.assert_not_called()


@pytest.mark.unit
class TestComments:
    """Tests for comment rendering."""

    def test_multiline_body_is_quoted(self) -> None:
        out = io.StringIO()
        comment = CommentAction(
            id="a1",
            date=datetime(2024, 1, 6, 9, 0, tzinfo=timezone.utc),
            author="Ada Lovelace",
            text="line one\nline two\n\nline four",
        )

        render_comment(out, comment)

        assert out.getvalue() == (
            "> **2024-01-06** - **Ada Lovelace:**\n"
            "> line one\n"
            "> line two\n"
            "> \n"
            "> line four\n"
            "\n"
        )

    def test_comments_sorted_oldest_first(self, client: MagicMock, card: Card) -> None:
        client.fetch_card_actions.return_value = [
            make_comment("newest", "2024-01-08T00:00:00Z"),
            make_comment("oldest", "2024-01-06T00:00:00Z"),
            {"id": "x", "type": "addMemberToCard", "date": "2024-01-07T00:00:00Z"},
        ]

        output = _render(client, card, ExportOptions(show_comments=True))

        assert output.index("oldest") < output.index("newest")
        assert "2024-01-07" not in output

    def test_bad_comment_date_aborts(self, client: MagicMock, card: Card) -> None:
        client.fetch_card_actions.return_value = [make_comment("hi", "tomorrow")]

        with pytest.raises(TimestampParseError):
            _render(client, card, ExportOptions(show_comments=True))


@pytest.mark.unit
class TestRenderExport:
    """Tests for render_export."""

    def test_renders_cards_in_given_order_and_flushes(
        self, client: MagicMock, card: Card
    ) -> None:
        other = Card(
            id="c2",
            name="Second",
            url="https://trello.com/c/c2",
            desc="",
            last_activity=datetime(2024, 1, 9, tzinfo=timezone.utc),
        )
        out = MagicMock(wraps=io.StringIO())

        render_export(client, [card, other], ExportOptions(), out)

        written = "".join(call.args[0] for call in out.write.call_args_list)
        assert written == (
            "#### **2024-01-05** [Fix bug](https://trello.com/c/c1)\n"
            "#### **2024-01-09** [Second](https://trello.com/c/c2)\n"
        )
        assert out.flush.call_count == 2
