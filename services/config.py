"""
Relay configuration.

Settings are read from the environment. A `.env` file in the project root is
loaded first so local development does not need exported variables.

Environment variables:
- RESEND_API_KEY: Resend API key (email dispatch fails without it)
- BUSINESS_EMAIL: Inbox that receives new enquiry notifications
- BUSINESS_SENDER_EMAIL / CUSTOMER_SENDER_EMAIL: From addresses
- CRM_WEBHOOK_URL, CRM_WEBHOOK_KEY: CRM enquiry webhook and its API key
  (NEXT_PUBLIC_CRM_WEBHOOK_KEY is accepted for older deployments)
- CRM_TIMEOUT_SECONDS: Webhook timeout (default: 10)
- PORT: Listening port for the standalone server (default: 3001)
- LOG_LEVEL: Root log level (default: INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_BUSINESS_EMAIL: str = "reducemybills@revo-utilities.com"
DEFAULT_BUSINESS_SENDER: str = "website@revo-utilities.com"
DEFAULT_CUSTOMER_SENDER: str = "reducemybills@revo-utilities.com"
DEFAULT_CRM_WEBHOOK_URL: str = "https://utilities.maine-stream.com/api/public/webhook/enquiry"
DEFAULT_PORT: int = 3001

_ENV_PATH = Path(__file__).parent.parent / ".env"


@dataclass(frozen=True, slots=True)
class RelayConfig:
    resend_api_key: Optional[str] = None
    business_email: str = DEFAULT_BUSINESS_EMAIL
    business_sender: str = DEFAULT_BUSINESS_SENDER
    customer_sender: str = DEFAULT_CUSTOMER_SENDER
    crm_webhook_url: str = DEFAULT_CRM_WEBHOOK_URL
    crm_webhook_key: str = ""
    crm_timeout_seconds: float = 10.0
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


def _get(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _number(env: Mapping[str, str], name: str, default: float, cast: type) -> float:
    raw = _get(env, name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise RuntimeError(
            f"Invalid environment variable: {name}={raw!r}. "
            f"Expected a {cast.__name__}."
        ) from None


def load_config(env: Optional[Mapping[str, str]] = None) -> RelayConfig:
    """
    Build a RelayConfig.

    Args:
        env: Variables to read (default: os.environ after loading `.env`)

    Raises:
        RuntimeError: If a numeric variable cannot be parsed
    """
    if env is None:
        load_dotenv(dotenv_path=_ENV_PATH)
        env = os.environ

    return RelayConfig(
        resend_api_key=_get(env, "RESEND_API_KEY"),
        business_email=_get(env, "BUSINESS_EMAIL") or DEFAULT_BUSINESS_EMAIL,
        business_sender=_get(env, "BUSINESS_SENDER_EMAIL") or DEFAULT_BUSINESS_SENDER,
        customer_sender=_get(env, "CUSTOMER_SENDER_EMAIL") or DEFAULT_CUSTOMER_SENDER,
        crm_webhook_url=_get(env, "CRM_WEBHOOK_URL") or DEFAULT_CRM_WEBHOOK_URL,
        crm_webhook_key=(
            _get(env, "CRM_WEBHOOK_KEY")
            or _get(env, "NEXT_PUBLIC_CRM_WEBHOOK_KEY")
            or ""
        ),
        crm_timeout_seconds=_number(env, "CRM_TIMEOUT_SECONDS", 10.0, float),
        port=int(_number(env, "PORT", DEFAULT_PORT, int)),
        log_level=(_get(env, "LOG_LEVEL") or "INFO").upper(),
    )


__all__ = ["RelayConfig", "load_config"]
