"""
HTTP helpers for talking to package registries.

Key Features:

- **Retry Logic with Exponential Backoff** - Automatically retries on transient failures (429, 500, 502, 503, 504) with exponential backoff. Configurable via urllib3.util.Retry.
- **JSON Only** - Registry endpoints return JSON; responses are decoded and type-checked before being handed back.
- **Error Chaining** - Every transport, HTTP and decoding failure is raised as NetworkError chained with 'from err'.

Example:
Fetch a registry document:

    >>> from pvpver.io import get_json
    >>> data = get_json("https://hackage.haskell.org/package/aeson.json")
    >>> sorted(data)[:2]
    ['0.1.0.0', '0.10.0.0']

Notes:
- User-Agent identifies pvpver to help registry operators
- Timeouts are per-request
"""

from __future__ import annotations

import json
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from pvpver.exceptions import NetworkError
from pvpver.logging import get_global_logger

USER_AGENT = "pvpver/0.1 (+https://github.com/RogerCibrian/pvpver)"


def make_session() -> requests.Session:
    """
    Create a requests.Session with sane retry/backoff defaults.

    - Retries on common transient status codes.
    - Applies exponential backoff.
    - Sets a helpful User-Agent and asks for JSON.
    """
    s = requests.Session()
    retries = Retry(
        total=5,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
        raise_on_status=False,
    )
    s.headers.update(
        {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
    )
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.mount("https://", HTTPAdapter(max_retries=retries))
    return s


def get_json(url: str, *, timeout: int = 30) -> Any:
    """GET a URL and decode its JSON body.

    Args:
        url: Endpoint to fetch.
        timeout: Per-request timeout (seconds).

    Returns:
        The decoded JSON document.

    Raises:
        NetworkError: On connection failures, non-2xx responses (after
            retries) or a body that is not valid JSON.
    """
    logger = get_global_logger()
    logger.verbose("HTTP", f"GET {url}")

    with make_session() as session:
        try:
            response = session.get(url, timeout=timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as err:
            raise NetworkError(
                f"request failed for {url}: {response.status_code} {response.reason}"
            ) from err
        except requests.exceptions.RequestException as err:
            raise NetworkError(f"failed to call {url}: {err}") from err

        logger.verbose("HTTP", f"Response: {response.status_code} {response.reason}")

        try:
            data = response.json()
        except (json.JSONDecodeError, requests.exceptions.JSONDecodeError) as err:
            raise NetworkError(
                f"invalid JSON response from {url}. Response: {response.text[:200]}"
            ) from err

    logger.debug("HTTP", f"JSON response: {json.dumps(data)[:500]}")
    return data
