"""Minimal blocking client for the Trello REST API."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from .exceptions import AuthError, NotFoundError, TransportError, TrelloAPIError
from .logging import sanitize_for_log

TRELLO_BASE_URL = "https://api.trello.com/1"

logger = logging.getLogger("trello2md.client")


def _error_for_status(status: int, detail: str) -> TrelloAPIError:
    message = f"Trello API error {status}: {detail}"
    if status == 401:
        return AuthError(message, status=status, detail=detail)
    # Trello answers 400 "invalid id" for ids that can't exist
    if status == 404 or (status == 400 and detail.strip().lower() == "invalid id"):
        return NotFoundError(message, status=status, detail=detail)
    return TransportError(message, status=status, detail=detail)


class TrelloClient:
    def __init__(
        self,
        *,
        api_key: str,
        token: str,
        timeout_s: float = 20.0,
        base_url: str = TRELLO_BASE_URL,
    ) -> None:
        self._api_key = api_key
        self._token = token
        self._timeout_s = timeout_s
        self._base_url = base_url.rstrip("/")

    def close(self) -> None:
        return None

    def _get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        merged = {
            "key": self._api_key,
            "token": self._token,
            **(params or {}),
        }
        qs = urlencode({k: str(v) for k, v in merged.items() if v is not None})
        url = f"{self._base_url}{path}?{qs}"
        req = Request(url, headers={"Accept": "application/json"})
        logger.debug("GET %s", sanitize_for_log(url))

        try:
            with urlopen(req, timeout=self._timeout_s) as resp:
                raw = resp.read().decode("utf-8")
        except HTTPError as e:
            try:
                detail = e.read().decode("utf-8")
            except OSError:
                detail = str(e)
            raise _error_for_status(e.code, detail) from e
        except (URLError, TimeoutError) as e:
            raise TransportError(f"Trello request to {path} failed: {e}") from e

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise TransportError(f"Trello returned invalid JSON for {path}") from e

    def fetch_board(self, board_id: str) -> dict[str, Any]:
        """Fetch a single board by ID.

        Args:
            board_id: Trello board ID.

        Returns:
            Board dict containing at least id and name.
        """
        return self._get(f"/boards/{board_id}", params={"fields": "id,name"})

    def fetch_lists_for_board(self, board_id: str) -> list[dict[str, Any]]:
        return self._get(f"/boards/{board_id}/lists", params={"fields": "id,name"})

    def fetch_cards_for_list(self, list_id: str) -> list[dict[str, Any]]:
        return self._get(
            f"/lists/{list_id}/cards",
            params={"fields": "id,name,desc,url,labels,dateLastActivity"},
        )

    def fetch_card_members(self, card_id: str) -> list[dict[str, Any]]:
        return self._get(f"/cards/{card_id}/members", params={"fields": "id,fullName"})

    def fetch_card_checklists(self, card_id: str) -> list[dict[str, Any]]:
        return self._get(
            f"/cards/{card_id}/checklists",
            params={"checkItem_fields": "name,state"},
        )

    def fetch_card_actions(self, card_id: str) -> list[dict[str, Any]]:
        """Fetch the comment actions of a card.

        Trello returns actions newest first.
        """
        return self._get(f"/cards/{card_id}/actions", params={"filter": "commentCard"})

    def fetch_card_attachments(self, card_id: str) -> list[dict[str, Any]]:
        return self._get(
            f"/cards/{card_id}/attachments", params={"fields": "id,name,url"}
        )

    def search_boards(self, query: str) -> list[dict[str, Any]]:
        """Search boards visible to the credentials by (partial) name.

        Args:
            query: Name substring to look for.

        Returns:
            Board dicts in the order the API ranks them.
        """
        result = self._get(
            "/search",
            params={
                "query": query,
                "modelTypes": "boards",
                "board_fields": "id,name",
                "partial": "true",
            },
        )
        if not isinstance(result, dict):
            return []
        boards = result.get("boards")
        return boards if isinstance(boards, list) else []
