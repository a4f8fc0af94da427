"""
Tests for `services/email_templates.py`.
"""

from __future__ import annotations

from datetime import datetime

from domain.enquiry import EnquirySubmission
from services.email_templates import (
    CALLBACK_PHONE,
    CUSTOMER_SUBJECT,
    build_business_notification,
    build_customer_confirmation,
    format_submitted_at,
)

SUBMITTED = datetime(2026, 3, 4, 9, 5, 7)


def test_business_subject_uses_default_label(valid_payload) -> None:
    message = build_business_notification(EnquirySubmission.from_payload(valid_payload), SUBMITTED)
    assert message.subject == "New Website Enquiry (Utilities Comparison)"


def test_business_body_lists_submitted_fields(valid_payload) -> None:
    valid_payload["marketingOptIn"] = True
    valid_payload["message"] = "Two sites in Glasgow"
    html = build_business_notification(EnquirySubmission.from_payload(valid_payload), SUBMITTED).html

    assert "<strong>Name:</strong> Jane Doe" in html
    assert "<strong>Business Name:</strong> Acme Ltd" in html
    assert "<strong>Current Supplier:</strong> EDF" in html
    assert "<strong>Message:</strong> Two sites in Glasgow" in html
    assert "<strong>Marketing opt-in:</strong> Yes" in html
    assert "<strong>Submitted:</strong> 04/03/2026, 09:05:07" in html


def test_business_body_omits_supplier_when_enquiry_type_given(valid_payload) -> None:
    valid_payload["enquiryType"] = "Partnership"
    message = build_business_notification(EnquirySubmission.from_payload(valid_payload), SUBMITTED)

    assert message.subject == "New Website Enquiry (Partnership)"
    assert "Current Supplier" not in message.html
    assert "Message:" not in message.html
    assert "<strong>Marketing opt-in:</strong> No" in message.html


def test_submitted_values_are_escaped(valid_payload) -> None:
    valid_payload["name"] = "<script>alert(1)</script>"
    submission = EnquirySubmission.from_payload(valid_payload)

    assert "<script>" not in build_business_notification(submission, SUBMITTED).html
    assert "&lt;script&gt;" in build_customer_confirmation(submission).html


def test_customer_confirmation(valid_payload) -> None:
    valid_payload["enquiryType"] = "Sub-broker Partnership"
    message = build_customer_confirmation(EnquirySubmission.from_payload(valid_payload))

    assert message.subject == CUSTOMER_SUBJECT
    assert "Thank you for your enquiry, Jane Doe!" in message.html
    assert "regarding Sub-broker Partnership for Acme Ltd" in message.html
    assert CALLBACK_PHONE in message.html


def test_format_submitted_at() -> None:
    assert format_submitted_at(datetime(2026, 12, 31, 23, 59, 1)) == "31/12/2026, 23:59:01"
