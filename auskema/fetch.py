"""Single GET request for the raw schedule payload."""

from __future__ import annotations

import requests

from auskema.errors import FetchError


def fetch_schedule(url: str, timeout: float = 30) -> str:
    """
    Download the raw schedule payload with a single GET request.

    Raises FetchError on transport errors and on any status other than 200.
    """
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchError(f"Request to {url} failed: {exc}") from exc

    if resp.status_code != 200:
        raise FetchError(f"Request to {url} returned HTTP {resp.status_code}")

    # Without a charset requests assumes ISO-8859-1 for text/*; payloads are UTF-8 JSON
    if "charset" not in resp.headers.get("Content-Type", "").lower():
        resp.encoding = "utf-8"

    return resp.text
