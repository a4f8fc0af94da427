"""
CRM webhook client.

Posts enquiry payloads to the CRM's public webhook. Used by the proxy
endpoint so the browser never calls the CRM directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import requests


@dataclass(frozen=True, slots=True)
class CrmResponse:
    """
    Upstream answer.

    body is the decoded JSON value of any type, or None when the CRM sent
    nothing parseable.
    """
    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class CrmWebhook(Protocol):
    def post(self, payload: Any) -> CrmResponse:
        ...


class CrmWebhookClient:
    """
    requests-based webhook client.

    Transport failures (connection errors, timeouts) are raised as
    requests.RequestException for the caller to handle.
    """

    def __init__(self, url: str, api_key: str = "", timeout: float = 10.0) -> None:
        self.url = url
        self.api_key = api_key
        self.timeout = timeout

    def post(self, payload: Any) -> CrmResponse:
        response = requests.post(
            self.url,
            json=payload,
            headers={
                "Content-Type": "application/json",
                "x-api-key": self.api_key,
            },
            timeout=self.timeout,
        )

        try:
            body = response.json()
        except ValueError:
            body = None

        return CrmResponse(status_code=response.status_code, body=body)


__all__ = ["CrmResponse", "CrmWebhook", "CrmWebhookClient"]
