"""
Dispatch service for delivering enquiries.

Two backends, chosen by the endpoint that was called:
- Email: business notification, then customer confirmation, via Resend
- CRM: raw payload relayed to the CRM webhook

Handles:
- Strictly sequential sends (business first)
- Per-channel outcome tracking so partial delivery is logged distinctly
- Mapping provider failures to UpstreamError (no retries)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from domain.dispatch import ChannelOutcome, DispatchChannel, DispatchResult
from domain.enquiry import EnquirySubmission
from domain.errors import UpstreamError
from providers.crm_client import CrmWebhook
from providers.email_client import EmailSender
from services.config import RelayConfig
from services.email_templates import (
    build_business_notification,
    build_customer_confirmation,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CrmRelayResult:
    """What the CRM answered, ready to be passed back to the caller."""
    status_code: int
    body: Any
    dispatch: DispatchResult


def _fail(result: DispatchResult) -> UpstreamError:
    failed = ", ".join(channel.value for channel in result.failed_channels)
    if result.partial:
        logger.error("Partial enquiry delivery: failed channels [%s]", failed)
    else:
        logger.error("Enquiry delivery failed on all attempted channels [%s]", failed)
    return UpstreamError(f"Delivery failed: {failed}")


def send_enquiry_emails(
    submission: EnquirySubmission,
    config: RelayConfig,
    email_client: Optional[EmailSender],
) -> DispatchResult:
    """
    Send the business notification and the customer confirmation.

    Args:
        submission: A validated, non-bot enquiry
        config: Sender and inbox addresses
        email_client: Provider client (None when no API key is configured)

    Returns:
        DispatchResult with both channels successful

    Raises:
        UpstreamError: If the provider is missing or either send fails. The
            confirmation is not attempted when the notification fails.
    """
    result = DispatchResult()

    if email_client is None:
        result.record(ChannelOutcome(
            channel=DispatchChannel.BUSINESS_NOTIFICATION,
            success=False,
            error="Email provider not configured",
        ))
        raise _fail(result)

    sends = [
        (
            DispatchChannel.BUSINESS_NOTIFICATION,
            config.business_sender,
            config.business_email,
            build_business_notification(submission),
        ),
        (
            DispatchChannel.CUSTOMER_CONFIRMATION,
            config.customer_sender,
            submission.email or "",
            build_customer_confirmation(submission),
        ),
    ]

    for channel, sender, recipient, message in sends:
        logger.info("Sending %s", channel.value)
        try:
            message_id = email_client.send(
                sender=sender,
                recipient=recipient,
                subject=message.subject,
                html=message.html,
            )
        except Exception as e:
            logger.exception("Email provider error on %s", channel.value)
            result.record(ChannelOutcome(channel=channel, success=False, error=str(e)))
            raise _fail(result) from e

        result.record(ChannelOutcome(channel=channel, success=True, reference=message_id))

    return result


def relay_to_crm(payload: Any, crm_client: Optional[CrmWebhook]) -> CrmRelayResult:
    """
    Forward a raw enquiry payload to the CRM webhook.

    No field validation is applied; the CRM owns its own rules.

    Returns:
        CrmRelayResult carrying the upstream 2xx status and JSON body

    Raises:
        UpstreamError: On transport failure (500) or a non-2xx answer, in which
            case the upstream status and body are kept for pass-through.
    """
    result = DispatchResult()

    if crm_client is None:
        result.record(ChannelOutcome(
            channel=DispatchChannel.CRM_WEBHOOK,
            success=False,
            error="CRM webhook not configured",
        ))
        raise _fail(result)

    try:
        response = crm_client.post(payload)
    except requests.RequestException as e:
        logger.exception("CRM submission error")
        result.record(ChannelOutcome(
            channel=DispatchChannel.CRM_WEBHOOK,
            success=False,
            error=str(e),
        ))
        raise _fail(result) from e

    result.record(ChannelOutcome(
        channel=DispatchChannel.CRM_WEBHOOK,
        success=response.ok,
        reference=str(response.status_code),
        error=None if response.ok else f"Upstream returned {response.status_code}",
    ))

    if not response.ok:
        logger.error("CRM webhook rejected enquiry with status %d", response.status_code)
        raise UpstreamError(
            f"CRM webhook returned {response.status_code}",
            upstream_status=response.status_code,
            upstream_body=response.body,
        )

    return CrmRelayResult(
        status_code=response.status_code,
        body=response.body if response.body is not None else {},
        dispatch=result,
    )


__all__ = ["CrmRelayResult", "relay_to_crm", "send_enquiry_emails"]
