"""
Enquiry relay pipeline.

The one request-handling path shared by the standalone server and the
serverless handler:

    method gate -> client identity -> rate limit -> bot check
        -> validation (email backend only) -> dispatch

Every stage may end the request early. Errors raised by the stages are
mapped to responses here and nowhere else.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

from domain.enquiry import EnquirySubmission
from domain.errors import EnquiryError, MethodNotAllowed, RateLimited
from services.bot_detection import is_likely_bot
from services.client_identity import resolve_client_address
from services.config import RelayConfig
from services.dispatch_service import relay_to_crm, send_enquiry_emails
from services.runtime import RelayClients
from services.validation import validate_submission

logger = logging.getLogger(__name__)

SUCCESS_BODY: dict[str, Any] = {
    "success": True,
    "message": "Enquiry submitted successfully",
}

_CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}


class DispatchBackend(str, Enum):
    EMAIL = "email"
    CRM = "crm"


@dataclass(frozen=True, slots=True)
class RelayRequest:
    """
    Transport-neutral request.

    body: Decoded JSON (None when missing or unparseable)
    remote_addr: Peer address reported by the transport
    """
    method: str
    headers: Mapping[str, Union[str, Sequence[str]]] = field(default_factory=dict)
    body: Any = None
    remote_addr: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RelayResponse:
    """body is None for responses without content (preflight)."""
    status_code: int
    headers: dict[str, str]
    body: Any = None


def cors_headers() -> dict[str, str]:
    """Fixed CORS headers sent on every response."""
    return dict(_CORS_HEADERS)


def _respond(status_code: int, body: Any) -> RelayResponse:
    return RelayResponse(status_code=status_code, headers=cors_headers(), body=body)


def handle_enquiry(
    request: RelayRequest,
    config: RelayConfig,
    clients: RelayClients,
    backend: DispatchBackend = DispatchBackend.EMAIL,
) -> RelayResponse:
    """
    Run one enquiry through the relay.

    Args:
        request: Incoming request
        config: Relay settings (addresses, CRM endpoint)
        clients: Shared rate limiter and provider clients
        backend: EMAIL for the contact form, CRM for the webhook proxy

    Returns:
        RelayResponse with CORS headers. Bots get the same success body as
        genuine submissions.
    """
    method = request.method.upper()
    if method == "OPTIONS":
        return _respond(200, None)

    try:
        if method != "POST":
            raise MethodNotAllowed(f"{method} not supported")

        client_key = resolve_client_address(request.headers, request.remote_addr)
        if clients.rate_limiter.is_rate_limited(client_key):
            raise RateLimited(f"Client {client_key} exceeded the rate limit")

        submission = EnquirySubmission.from_payload(request.body)
        if is_likely_bot(submission):
            return _respond(200, dict(SUCCESS_BODY))

        if backend is DispatchBackend.CRM:
            payload = request.body if request.body is not None else {}
            relayed = relay_to_crm(payload, clients.crm)
            return _respond(relayed.status_code, relayed.body)

        validation = validate_submission(submission)
        validation.raise_for_errors()

        send_enquiry_emails(submission, config, clients.email)
        return _respond(200, dict(SUCCESS_BODY))

    except EnquiryError as e:
        if e.status_code >= 500:
            logger.error("Enquiry failed (%s): %s", backend.value, e)
        else:
            logger.info("Enquiry rejected with %d: %s", e.status_code, e)
        return _respond(e.status_code, e.response_body())

    except Exception:
        logger.exception("Unexpected error handling enquiry (%s)", backend.value)
        return _respond(500, EnquiryError().response_body())


__all__ = [
    "DispatchBackend",
    "RelayRequest",
    "RelayResponse",
    "SUCCESS_BODY",
    "cors_headers",
    "handle_enquiry",
]
