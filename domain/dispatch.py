"""
Domain: Dispatch outcome.

Records what happened on every delivery channel attempted for one enquiry,
so a failure after the business notification went out can be told apart from
a failure where nothing was delivered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DispatchChannel(str, Enum):
    BUSINESS_NOTIFICATION = "business_notification"
    CUSTOMER_CONFIRMATION = "customer_confirmation"
    CRM_WEBHOOK = "crm_webhook"


@dataclass(frozen=True, slots=True)
class ChannelOutcome:
    """
    Result of a single provider call.

    reference: provider message id for email, upstream HTTP status for the CRM
    error: provider error text (server-side only, never returned to clients)
    """
    channel: DispatchChannel
    success: bool
    reference: Optional[str] = None
    error: Optional[str] = None


@dataclass(slots=True)
class DispatchResult:
    """Outcomes for every channel attempted, in the order they were attempted."""

    outcomes: List[ChannelOutcome] = field(default_factory=list)

    def record(self, outcome: ChannelOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def success(self) -> bool:
        """True if at least one channel was attempted and none failed."""
        return bool(self.outcomes) and all(o.success for o in self.outcomes)

    @property
    def partial(self) -> bool:
        """True if some channels were delivered and some failed."""
        delivered = [o for o in self.outcomes if o.success]
        return bool(delivered) and len(delivered) < len(self.outcomes)

    @property
    def failed_channels(self) -> List[DispatchChannel]:
        return [o.channel for o in self.outcomes if not o.success]


__all__ = [
    "ChannelOutcome",
    "DispatchChannel",
    "DispatchResult",
]
