"""HTTP transport that submits scraped records to the citelet server."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any, Protocol

import requests

from errors import TransportError
from models import ScrapedRecord, SubmitResult

DEFAULT_SERVER_URL = "http://127.0.0.1:5000/sendrefs/"
DEFAULT_TIMEOUT_SECONDS = 30.0

LOGGER = logging.getLogger(__name__)


class Transport(Protocol):
    async def submit(self, record: ScrapedRecord, metadata: dict[str, str]) -> SubmitResult: ...


class HttpTransport:
    """POSTs one record as JSON and parses the server's JSON reply.

    There is no retry: a failed round-trip raises ``TransportError`` and the
    caller decides what to do.
    """

    def __init__(self, url: str | None = None, timeout: float | None = None) -> None:
        self.url = url or os.getenv("CITELET_SERVER_URL", DEFAULT_SERVER_URL)
        self.timeout = timeout or float(os.getenv("CITELET_SUBMIT_TIMEOUT", DEFAULT_TIMEOUT_SECONDS))

    async def submit(self, record: ScrapedRecord, metadata: dict[str, str]) -> SubmitResult:
        return await asyncio.to_thread(self.submit_sync, record, metadata)

    def submit_sync(self, record: ScrapedRecord, metadata: dict[str, str]) -> SubmitResult:
        payload = {**record.to_dict(), **metadata}
        LOGGER.info(
            "Submitting url=%s publisher=%s cited_refs=%s to %s",
            record.url,
            record.publisher,
            len(record.cited_refs),
            self.url,
        )

        try:
            response = requests.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise TransportError(
                f"Submission to {self.url} failed: {exc} {_response_text(exc)}".rstrip(),
                {"url": record.url},
            ) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(f"Server returned non-JSON body: {response.text[:200]}") from exc
        if not isinstance(body, dict):
            raise TransportError(f"Unexpected server response shape: {body!r}")

        return _parse_result(body)


def _parse_result(body: dict[str, Any]) -> SubmitResult:
    status = body.get("status")
    message = body.get("msg")
    return SubmitResult(
        status=status if isinstance(status, str) else "",
        message=message if isinstance(message, str) else "",
        body=body,
    )


def _response_text(exc: requests.RequestException) -> str:
    if not isinstance(exc, requests.HTTPError) or exc.response is None:
        return ""
    try:
        return json.dumps(exc.response.json())
    except ValueError:
        return exc.response.text
