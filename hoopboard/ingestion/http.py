"""Outbound JSON fetching shared by the scoreboard readers."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from hoopboard.ingestion.errors import FetchError, ParseError

logger = logging.getLogger(__name__)
MAX_BODY_SNIPPET = 300
DEFAULT_USER_AGENT = "hoopboard/1.0 (+https://example.local)"


def _truncate(value: str, limit: int = MAX_BODY_SNIPPET) -> str:
    if len(value) <= limit:
        return value
    return value[:limit] + "...<truncated>"


def wrap_relay(target_url: str, relay_url: str) -> str:
    """Route ``target_url`` through the relay service's ``?url=`` parameter."""
    separator = "&" if "?" in relay_url else "?"
    return f"{relay_url}{separator}url={quote(target_url, safe='')}"


def fetch_json(url: str, timeout: float | None = None) -> dict[str, Any]:
    headers = {
        "User-Agent": DEFAULT_USER_AGENT,
        "Accept": "application/json",
    }
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.error("Scoreboard request failed url=%s error=%s", url, exc)
        raise FetchError(f"Request failed: {exc}", url=url) from exc

    if not 200 <= response.status_code < 300:
        body_snippet = _truncate(response.text or "")
        logger.error(
            "Scoreboard non-2xx status=%s url=%s body=%s",
            response.status_code,
            url,
            body_snippet,
        )
        raise FetchError(
            f"Upstream returned status {response.status_code}",
            url=url,
            status=response.status_code,
            body=body_snippet,
        )

    try:
        payload = response.json()
    except ValueError as exc:
        raise ParseError(
            "Scoreboard response was not valid JSON: " + _truncate(response.text or "")
        ) from exc
    if not isinstance(payload, dict):
        raise ParseError(
            f"Scoreboard response was {type(payload).__name__}, expected a JSON object"
        )
    return payload
