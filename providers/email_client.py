"""
Resend email client.

This module contains *only* the provider wrapper. Which messages are sent, and
in what order, is decided by the dispatch service.
"""

from __future__ import annotations

from typing import Any, Protocol

import resend


class EmailSender(Protocol):
    def send(self, *, sender: str, recipient: str, subject: str, html: str) -> str:
        """Send one HTML email and return the provider message id."""
        ...


class ResendEmailClient:
    """
    Thin wrapper around the Resend SDK.

    The SDK is configured through a module-level api_key, so every client in a
    process shares the same key.
    """

    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        resend.api_key = api_key

    def send(self, *, sender: str, recipient: str, subject: str, html: str) -> str:
        params: Any = {
            "from": sender,
            "to": [recipient],
            "subject": subject,
            "html": html,
        }
        response = resend.Emails.send(params)
        if isinstance(response, dict):
            return str(response.get("id", ""))
        return str(getattr(response, "id", ""))


__all__ = ["EmailSender", "ResendEmailClient"]
