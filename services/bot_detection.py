"""
Bot heuristics for the contact form.

Two zero-friction signals, checked in order:
1. Honeypot: the hidden companyWebsite field was filled in.
2. Timing: the form was submitted less than 1.5 seconds after it rendered.

A positive result is never reported to the caller; the pipeline answers bots
with the normal success response.
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.enquiry import EnquirySubmission
from domain.time import now_epoch_ms, parse_epoch_ms

logger = logging.getLogger(__name__)

MIN_FORM_FILL_TIME_MS: int = 1500


def is_likely_bot(submission: EnquirySubmission, now_ms: Optional[float] = None) -> bool:
    """
    Classify a submission as automated.

    Args:
        submission: Parsed enquiry
        now_ms: Current time in epoch milliseconds (default: wall clock)

    Returns:
        True if the honeypot is filled or the form was completed implausibly fast
    """
    honeypot = submission.company_website
    if isinstance(honeypot, str) and honeypot.strip():
        logger.info("Bot detected: honeypot field filled")
        return True

    started_at = parse_epoch_ms(submission.form_started_at)
    if started_at is not None:
        now = now_epoch_ms() if now_ms is None else now_ms
        if now - started_at < MIN_FORM_FILL_TIME_MS:
            logger.info("Bot detected: form completed in %.0f ms", now - started_at)
            return True

    return False


__all__ = ["MIN_FORM_FILL_TIME_MS", "is_likely_bot"]
