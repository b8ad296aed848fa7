import asyncio
import json
import logging
from typing import Any, Optional
from urllib.error import HTTPError
from urllib.request import Request, urlopen


logger = logging.getLogger(__name__)


class HttpStatusError(RuntimeError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"{url} responded with HTTP {status_code}")
        self.url = url
        self.status_code = status_code


def _decode_json(raw: bytes, url: str) -> Any:
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid JSON body from {url}: {e}") from e


def request_json(
    url: str,
    *,
    method: str = "GET",
    payload: Optional[dict] = None,
    timeout_seconds: Optional[float] = None,
    raise_for_status: bool = True,
) -> Any:
    """Perform a blocking JSON request and return the decoded body.

    Transport failures propagate as ``OSError`` (``URLError`` included).
    """
    data = None
    headers = {"Accept": "application/json"}
    if payload is not None:
        data = json.dumps(payload).encode("utf-8")
        headers["Content-Type"] = "application/json"

    request = Request(url, data=data, headers=headers, method=method)
    try:
        with urlopen(request, timeout=timeout_seconds) as resp:
            body = resp.read()
    except HTTPError as e:
        if raise_for_status:
            raise HttpStatusError(url, e.code) from e
        # The contact backend still reports its failures in a JSON body
        with e:
            body = e.read()
    except OSError as e:
        logger.warning(f"{method} {url} failed: {str(e)}")
        raise

    return _decode_json(body, url)


class JsonHttpClient:
    """Async facade over ``request_json``.

    The blocking urllib calls are offloaded to the default thread pool with
    ``asyncio.to_thread`` so the event loop keeps serving other callbacks.
    No retry and no cancellation: a hung request simply never resolves
    unless ``timeout_seconds`` is set.
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        self.timeout_seconds = timeout_seconds

    async def get_json(self, url: str) -> Any:
        return await asyncio.to_thread(
            request_json,
            url,
            timeout_seconds=self.timeout_seconds,
        )

    async def post_json(self, url: str, payload: dict) -> Any:
        # The contact endpoint reports failures in the JSON envelope, so error statuses are read too
        return await asyncio.to_thread(
            request_json,
            url,
            method="POST",
            payload=payload,
            timeout_seconds=self.timeout_seconds,
            raise_for_status=False,
        )
