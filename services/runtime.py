"""
Collaborators shared by every request: the rate limiter and provider clients.

Built once per process (or per warm serverless instance) and passed into the
pipeline explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from providers.crm_client import CrmWebhook, CrmWebhookClient
from providers.email_client import EmailSender, ResendEmailClient
from services.config import RelayConfig
from services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RelayClients:
    rate_limiter: RateLimiter
    email: Optional[EmailSender] = None
    crm: Optional[CrmWebhook] = None


def build_clients(config: RelayConfig) -> RelayClients:
    """Construct the production collaborators for a config."""
    email: Optional[EmailSender] = None
    if config.resend_api_key:
        email = ResendEmailClient(config.resend_api_key)
    else:
        logger.warning("RESEND_API_KEY is not set; contact form emails will fail")

    crm = CrmWebhookClient(
        url=config.crm_webhook_url,
        api_key=config.crm_webhook_key,
        timeout=config.crm_timeout_seconds,
    )

    return RelayClients(rate_limiter=RateLimiter(), email=email, crm=crm)


__all__ = ["RelayClients", "build_clients"]
