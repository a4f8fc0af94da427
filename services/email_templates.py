"""
Email templates for enquiry notifications.

Two messages go out per genuine enquiry:
- Business notification: every submitted field, for the sales inbox
- Customer confirmation: a thank-you note to the submitter

All submitted values are HTML-escaped before they are embedded.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from html import escape
from typing import Any, List, Optional
from zoneinfo import ZoneInfo

from domain.enquiry import EnquirySubmission

UK_TIMEZONE = ZoneInfo("Europe/London")
CALLBACK_PHONE: str = "0141 280 9986"
CUSTOMER_SUBJECT: str = "Thank you for your enquiry - Revo Utilities"


@dataclass(frozen=True, slots=True)
class EmailMessage:
    subject: str
    html: str


def _field(label: str, value: Any) -> str:
    return f"<p><strong>{label}:</strong> {escape(str(value if value is not None else ''))}</p>"


def format_submitted_at(value: datetime) -> str:
    """Format a timestamp the way en-GB locales print it: 19/10/2026, 14:05:09."""
    return value.strftime("%d/%m/%Y, %H:%M:%S")


def build_business_notification(
    submission: EnquirySubmission,
    submitted_at: Optional[datetime] = None,
) -> EmailMessage:
    """
    Build the notification sent to the business inbox.

    Current supplier is included only on the comparison flow (where it was
    required) and the message only when one was written.
    """
    enquiry_type = submission.resolved_enquiry_type
    when = submitted_at or datetime.now(UK_TIMEZONE)

    lines: List[str] = [
        "<h2>New Enquiry from Website</h2>",
        _field("Enquiry type", enquiry_type),
        _field("Name", submission.name),
        _field("Business Name", submission.business_name),
        _field("Email", submission.email),
        _field("Phone", submission.phone),
    ]
    if submission.requires_current_supplier:
        lines.append(_field("Current Supplier", submission.current_supplier))
    if submission.has_message:
        lines.append(_field("Message", submission.message))
    lines.append(_field("Marketing opt-in", "Yes" if submission.marketing_opt_in else "No"))
    lines.append(_field("Submitted", format_submitted_at(when)))

    return EmailMessage(
        subject=f"New Website Enquiry ({enquiry_type})",
        html="\n".join(lines),
    )


def build_customer_confirmation(submission: EnquirySubmission) -> EmailMessage:
    """Build the confirmation sent back to the person who filled in the form."""
    name = escape(submission.name or "")
    business_name = escape(submission.business_name or "")
    enquiry_type = escape(submission.resolved_enquiry_type)

    html = "\n".join([
        f"<h2>Thank you for your enquiry, {name}!</h2>",
        f"<p>We've received your enquiry regarding {enquiry_type} for {business_name}.</p>",
        "<p>Our team will review your requirements and get back to you within 24 hours "
        "with a tailored quote.</p>",
        f"<p>If you have any urgent questions, please call us on <strong>{CALLBACK_PHONE}</strong>.</p>",
        "<br>",
        "<p>Best regards,<br>The Revo Utilities Team</p>",
    ])

    return EmailMessage(subject=CUSTOMER_SUBJECT, html=html)


__all__ = [
    "CALLBACK_PHONE",
    "CUSTOMER_SUBJECT",
    "EmailMessage",
    "build_business_notification",
    "build_customer_confirmation",
    "format_submitted_at",
]
