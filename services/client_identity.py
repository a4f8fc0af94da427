"""
Client identity resolution.

Derives a best-effort client address for rate limiting. Forwarded headers are
client-influenceable, so the result must never be used for authorization.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence, Union

UNKNOWN_CLIENT: str = "unknown"

HeaderValue = Union[str, Sequence[str]]


def _first_token(value: str) -> str:
    return value.split(",", 1)[0].strip()


def _forwarded_for(headers: Mapping[str, HeaderValue]) -> Optional[HeaderValue]:
    for key, value in headers.items():
        if key.lower() == "x-forwarded-for":
            return value
    return None


def resolve_client_address(
    headers: Optional[Mapping[str, HeaderValue]],
    remote_addr: Optional[str] = None,
) -> str:
    """
    Resolve the rate-limit key for a request.

    Args:
        headers: Request headers. A repeated header may be given as a list.
        remote_addr: Peer address reported by the transport, if any

    Returns:
        First X-Forwarded-For hop, else the peer address, else "unknown".
        Never empty.
    """
    forwarded = _forwarded_for(headers or {})

    if isinstance(forwarded, str):
        if forwarded.strip():
            token = _first_token(forwarded)
            if token:
                return token
    elif forwarded:
        token = _first_token(str(forwarded[0]))
        if token:
            return token

    if remote_addr and remote_addr.strip():
        return remote_addr.strip()

    return UNKNOWN_CLIENT


__all__ = ["UNKNOWN_CLIENT", "resolve_client_address"]
