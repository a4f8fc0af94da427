"""
Required-field validation for enquiries.

Only presence is checked. Email format is left to the submitting page.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from domain.enquiry import EnquirySubmission, is_blank
from domain.errors import ValidationFailed


@dataclass(frozen=True, slots=True)
class ValidationResult:
    missing_fields: Tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.missing_fields

    def raise_for_errors(self) -> None:
        if self.missing_fields:
            raise ValidationFailed(self.missing_fields)


def validate_submission(submission: EnquirySubmission) -> ValidationResult:
    """
    Check required fields.

    name, businessName, email and phone are always required. currentSupplier
    is required only when no enquiryType was given.
    """
    required = {
        "name": submission.name,
        "businessName": submission.business_name,
        "email": submission.email,
        "phone": submission.phone,
    }
    if submission.requires_current_supplier:
        required["currentSupplier"] = submission.current_supplier

    missing = tuple(field for field, value in required.items() if is_blank(value))
    return ValidationResult(missing_fields=missing)


__all__ = ["ValidationResult", "validate_submission"]
