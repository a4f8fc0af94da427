"""
Domain: Enquiry relay errors.

Each error carries the HTTP status and the client-safe message it maps to.
Services raise these; the pipeline is the only place that turns them into
responses.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class EnquiryError(Exception):
    """Base error. Unclassified failures surface as a generic 500."""

    status_code: int = 500
    public_message: str = "Failed to submit enquiry"

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail

    def response_body(self) -> dict[str, Any]:
        return {"error": self.public_message}


class MethodNotAllowed(EnquiryError):
    status_code = 405
    public_message = "Method not allowed"


class ValidationFailed(EnquiryError):
    """Required fields missing. Field names are logged, never returned."""

    status_code = 400
    public_message = "All fields are required"

    def __init__(self, missing_fields: Sequence[str]) -> None:
        super().__init__(f"Missing required fields: {', '.join(missing_fields)}")
        self.missing_fields = tuple(missing_fields)


class RateLimited(EnquiryError):
    status_code = 429
    public_message = "Too many requests. Please try again later."


class UpstreamError(EnquiryError):
    """
    Email provider or CRM webhook failure.

    When the CRM answered with an error, its status and body are kept so the
    relay can pass them through unchanged.
    """

    status_code = 500

    def __init__(
        self,
        detail: Optional[str] = None,
        upstream_status: Optional[int] = None,
        upstream_body: Any = None,
    ) -> None:
        super().__init__(detail)
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
        if upstream_status is not None:
            self.status_code = upstream_status

    def response_body(self) -> Any:
        if self.upstream_body is not None:
            return self.upstream_body
        return super().response_body()


__all__ = [
    "EnquiryError",
    "MethodNotAllowed",
    "RateLimited",
    "UpstreamError",
    "ValidationFailed",
]
