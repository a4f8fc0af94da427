"""
Serverless entry points.

Vercel-style handlers for single-request deployments. Each warm instance
builds its config, provider clients and rate limiter once and reuses them, so
rate limiting holds for as long as the instance lives.
"""

import json
import logging
from functools import lru_cache
from typing import Any, Dict, Tuple

from services.config import RelayConfig, load_config
from services.enquiry_pipeline import (
    DispatchBackend,
    RelayRequest,
    handle_enquiry,
)
from services.runtime import RelayClients, build_clients

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_runtime() -> Tuple[RelayConfig, RelayClients]:
    config = load_config()
    return config, build_clients(config)


def _parse_body(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if not value or not str(value).strip():
        return None
    try:
        return json.loads(value)
    except ValueError:
        return None


def _remote_addr(request: Any) -> Any:
    client = getattr(request, "client", None)
    if client is not None:
        return getattr(client, "host", None)
    return getattr(request, "remote_addr", None)


def _handle(request: Any, backend: DispatchBackend) -> Tuple[str, int, Dict[str, str]]:
    config, clients = get_runtime()
    relay_request = RelayRequest(
        method=str(getattr(request, "method", "GET")),
        headers=dict(getattr(request, "headers", {}) or {}),
        body=_parse_body(getattr(request, "body", None)),
        remote_addr=_remote_addr(request),
    )

    response = handle_enquiry(relay_request, config, clients, backend)

    headers = dict(response.headers)
    if response.body is None:
        return "", response.status_code, headers
    headers["Content-Type"] = "application/json"
    return json.dumps(response.body), response.status_code, headers


def handler(request: Any) -> Tuple[str, int, Dict[str, str]]:
    """Contact form handler. Returns (body, status, headers)."""
    return _handle(request, DispatchBackend.EMAIL)


def crm_handler(request: Any) -> Tuple[str, int, Dict[str, str]]:
    """CRM proxy handler. Returns (body, status, headers)."""
    return _handle(request, DispatchBackend.CRM)
