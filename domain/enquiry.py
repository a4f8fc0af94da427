"""
Domain: Enquiry submission.

An EnquirySubmission is a single lead captured by the website contact form.
It is request-scoped and never persisted.

Contract excerpts implemented here:
- name, businessName, email and phone are always required.
- currentSupplier is required only when no explicit enquiryType was supplied
  (the default "Utilities Comparison" flow).
- A blank enquiryType resolves to the default label.
- companyWebsite is a honeypot and formStartedAt is the client render time in
  epoch milliseconds; both are only read by the bot heuristic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

DEFAULT_ENQUIRY_TYPE: str = "Utilities Comparison"


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def is_blank(value: Any) -> bool:
    """True for None, empty and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


@dataclass(frozen=True, slots=True)
class EnquirySubmission:
    """
    Parsed contact form submission.

    Field names follow Python conventions; `from_payload` maps them from the
    camelCase keys the website posts. The untouched mapping is kept in
    `raw_payload` so the CRM relay can forward it verbatim.
    """

    name: Optional[str] = None
    business_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    current_supplier: Optional[str] = None
    enquiry_type: Optional[str] = None
    message: Optional[str] = None
    marketing_opt_in: bool = False

    # Anti-spam signals
    company_website: Any = None
    form_started_at: Any = None

    raw_payload: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "EnquirySubmission":
        """
        Build a submission from a decoded JSON body.

        Anything that is not a JSON object is treated as an empty submission,
        which then fails validation rather than raising here.
        """
        if not isinstance(payload, Mapping):
            payload = {}

        return cls(
            name=_text(payload.get("name")),
            business_name=_text(payload.get("businessName")),
            email=_text(payload.get("email")),
            phone=_text(payload.get("phone")),
            current_supplier=_text(payload.get("currentSupplier")),
            enquiry_type=_text(payload.get("enquiryType")),
            message=_text(payload.get("message")),
            marketing_opt_in=bool(payload.get("marketingOptIn", False)),
            company_website=payload.get("companyWebsite"),
            form_started_at=payload.get("formStartedAt"),
            raw_payload=payload,
        )

    @property
    def resolved_enquiry_type(self) -> str:
        """Trimmed enquiry type, or the default label when blank."""
        if is_blank(self.enquiry_type):
            return DEFAULT_ENQUIRY_TYPE
        return self.enquiry_type.strip()  # type: ignore[union-attr]

    @property
    def requires_current_supplier(self) -> bool:
        """The supplier is only asked for on the default comparison flow."""
        return is_blank(self.enquiry_type)

    @property
    def has_message(self) -> bool:
        return not is_blank(self.message)


__all__ = [
    "DEFAULT_ENQUIRY_TYPE",
    "EnquirySubmission",
    "is_blank",
]
