#!/usr/bin/env python3
"""trello2md CLI entry point.

This module implements the `trello2md` command (see `pyproject.toml` scripts):

- `trello2md export-boards ...`
- `trello2md search-boards ...`
- `trello2md preview-export ...`
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, NoReturn

import typer

from . import __version__
from .boards import search_boards
from .client import TrelloClient
from .config import DEFAULT_LIST_FILTER, ExportOptions, _load_env
from .exceptions import Trello2MdError
from .export import export_boards
from .logging import setup_logging

logger = logging.getLogger("trello2md")


def _die(message: str, *, code: int = 1) -> NoReturn:
    """Print a user-facing error message and exit."""

    typer.echo(message, err=True)
    raise typer.Exit(code=code)


def _fail(error: Trello2MdError) -> NoReturn:
    logger.error("%s", error)
    # shown even when --log-level filters the record out
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


def _require_credentials(*, key: str | None, token: str | None) -> tuple[str, str]:
    resolved_key = key or os.getenv("KEY")
    resolved_token = token or os.getenv("TOKEN")

    if not resolved_key or not resolved_token:
        _die("Missing Trello credentials. Set KEY and TOKEN (or pass --key/--token).")
    return resolved_key, resolved_token


def _require_export_args(board_ids: list[str] | None, list_filter: str) -> list[str]:
    resolved = [b for b in (board_ids or []) if b]
    if not resolved:
        _die("No boards given. Pass --board-id (repeatable) or set BOARD_ID.")
    if not list_filter:
        _die("The list filter must not be empty.")
    return resolved


def _export(
    *,
    key: str | None,
    token: str | None,
    board_ids: list[str] | None,
    list_filter: str,
    options: ExportOptions,
) -> None:
    resolved_key, resolved_token = _require_credentials(key=key, token=token)
    resolved_board_ids = _require_export_args(board_ids, list_filter)

    client = TrelloClient(api_key=resolved_key, token=resolved_token)
    try:
        export_boards(client, resolved_board_ids, list_filter, options, sys.stdout)
    except Trello2MdError as e:
        _fail(e)
    finally:
        client.close()


def _search(*, key: str | None, token: str | None, board_filter: str) -> None:
    resolved_key, resolved_token = _require_credentials(key=key, token=token)
    if not board_filter:
        _die("The board filter must not be empty.")

    client = TrelloClient(api_key=resolved_key, token=resolved_token)
    try:
        boards = search_boards(client, board_filter)
    except Trello2MdError as e:
        _fail(e)
    finally:
        client.close()

    for board in boards:
        typer.echo(f"{board.id} - {board.name}")


def _preview(
    *,
    key: str | None,
    token: str | None,
    board_ids: list[str] | None,
    list_filter: str,
    options: ExportOptions,
) -> None:
    # Imported here so the plain exports don't pay for loading textual
    from .tui import ExportViewerApp

    resolved_key, resolved_token = _require_credentials(key=key, token=token)
    resolved_board_ids = _require_export_args(board_ids, list_filter)

    client = TrelloClient(api_key=resolved_key, token=resolved_token)
    try:
        ExportViewerApp(client, resolved_board_ids, list_filter, options).run()
    finally:
        client.close()


app = typer.Typer(
    help="Export a list from multiple Trello boards into a single Markdown document."
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"trello2md {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    ctx: typer.Context,
    env_file: str | None = typer.Option(
        None,
        "--env-file",
        help="Path to a .env file (defaults to ./.env when present).",
    ),
    key: str | None = typer.Option(
        None, "--key", help="Trello application key (or set KEY)."
    ),
    token: str | None = typer.Option(
        None, "--token", help="Trello API token (or set TOKEN)."
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="Log level (or set TRELLO2MD_LOG_LEVEL)."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Initialize global CLI state (env, logging, credentials)."""

    _load_env(env_file)
    setup_logging(level=log_level)
    ctx.ensure_object(dict)
    ctx.obj["key"] = key
    ctx.obj["token"] = token


def _board_id_option() -> Any:
    return typer.Option(
        None,
        "--board-id",
        envvar="BOARD_ID",
        help="Trello board id to export (repeatable, or set BOARD_ID).",
    )


def _list_filter_option() -> Any:
    return typer.Option(
        DEFAULT_LIST_FILTER,
        "--list-filter",
        envvar="LIST_FILTER",
        help="Name of the list to export from each board.",
    )


def _toggle_option(section: str, envvar: str, help_text: str) -> Any:
    return typer.Option(False, f"--show-{section}", envvar=envvar, help=help_text)


def _labels_and_members_option() -> Any:
    return _toggle_option(
        "labels-and-members", "SHOW_LABELS_AND_MEMBERS", "Render card labels and members."
    )


def _description_option() -> Any:
    return _toggle_option("description", "SHOW_DESCRIPTION", "Render card descriptions.")


def _checklists_option() -> Any:
    return _toggle_option("checklists", "SHOW_CHECKLISTS", "Render card checklists.")


def _comments_option() -> Any:
    return _toggle_option("comments", "SHOW_COMMENTS", "Render card comments.")


def _attachments_option() -> Any:
    return _toggle_option("attachments", "SHOW_ATTACHMENTS", "Render card attachments.")


@app.command("export-boards")
def export_boards_cmd(
    ctx: typer.Context,
    board_id: list[str] | None = _board_id_option(),
    list_filter: str = _list_filter_option(),
    show_labels_and_members: bool = _labels_and_members_option(),
    show_description: bool = _description_option(),
    show_checklists: bool = _checklists_option(),
    show_comments: bool = _comments_option(),
    show_attachments: bool = _attachments_option(),
) -> None:
    """Export a list from each board as Markdown to stdout."""

    obj: dict[str, Any] = ctx.ensure_object(dict)
    _export(
        key=obj.get("key"),
        token=obj.get("token"),
        board_ids=board_id,
        list_filter=list_filter,
        options=ExportOptions(
            show_labels_and_members=show_labels_and_members,
            show_description=show_description,
            show_checklists=show_checklists,
            show_comments=show_comments,
            show_attachments=show_attachments,
        ),
    )


@app.command("search-boards")
def search_boards_cmd(
    ctx: typer.Context,
    board_filter: str = typer.Option(
        "",
        "--board-filter",
        envvar="BOARD_FILTER",
        help="Board name substring to search for.",
    ),
) -> None:
    """Print `id - name` for every board matching the filter."""

    obj: dict[str, Any] = ctx.ensure_object(dict)
    _search(key=obj.get("key"), token=obj.get("token"), board_filter=board_filter)


@app.command("preview-export")
def preview_export_cmd(
    ctx: typer.Context,
    board_id: list[str] | None = _board_id_option(),
    list_filter: str = _list_filter_option(),
    show_labels_and_members: bool = _labels_and_members_option(),
    show_description: bool = _description_option(),
    show_checklists: bool = _checklists_option(),
    show_comments: bool = _comments_option(),
    show_attachments: bool = _attachments_option(),
) -> None:
    """Show the export in an interactive Markdown viewer."""

    obj: dict[str, Any] = ctx.ensure_object(dict)
    _preview(
        key=obj.get("key"),
        token=obj.get("token"),
        board_ids=board_id,
        list_filter=list_filter,
        options=ExportOptions(
            show_labels_and_members=show_labels_and_members,
            show_description=show_description,
            show_checklists=show_checklists,
            show_comments=show_comments,
            show_attachments=show_attachments,
        ),
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point for the `trello2md` script."""

    if argv is None:
        app()
        return 0  # pragma: no cover

    try:
        result = app(args=argv, standalone_mode=False)
    except typer.Exit as e:
        return int(e.exit_code)
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
