"""CORS relay: fetches a target URL server-side and returns it with open CORS headers.

Runs mounted under the main app (``/relay``) or standalone::

    uvicorn hoopboard.relay:relay_app --port 8787
"""

from __future__ import annotations

import logging

import requests
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response

logger = logging.getLogger(__name__)

RELAY_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
RELAY_TIMEOUT_SECONDS = 20
CACHE_CONTROL = "max-age=15"
ALLOWED_METHODS = "GET,HEAD,POST,OPTIONS"

# requests has already decoded and de-chunked the body.
_DROPPED_HEADERS = {
    "connection",
    "content-encoding",
    "content-length",
    "keep-alive",
    "transfer-encoding",
}
_OVERRIDDEN_HEADERS = {
    "access-control-allow-origin",
    "access-control-allow-methods",
    "cache-control",
}

relay_app = FastAPI(title="Hoopboard Relay")


@relay_app.options("/{path:path}")
def relay_preflight(path: str) -> Response:
    return Response(
        status_code=204,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Access-Control-Allow-Headers": "*",
        },
    )


@relay_app.api_route("/{path:path}", methods=["GET", "HEAD", "POST"])
def relay_forward(path: str, url: str | None = None) -> Response:
    if not url:
        return PlainTextResponse("Missing url parameter", status_code=400)

    try:
        upstream = requests.get(
            url,
            headers={"User-Agent": RELAY_USER_AGENT},
            timeout=RELAY_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        logger.error("Relay fetch failed url=%s error=%s", url, exc)
        return PlainTextResponse(f"Proxy fetch failed: {exc}", status_code=502)

    headers = {
        key: value
        for key, value in upstream.headers.items()
        if key.lower() not in _DROPPED_HEADERS | _OVERRIDDEN_HEADERS
    }
    headers["Access-Control-Allow-Origin"] = "*"
    headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
    headers["Cache-Control"] = CACHE_CONTROL
    logger.debug("Relayed url=%s status=%s", url, upstream.status_code)
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        headers=headers,
    )
