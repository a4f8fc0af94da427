"""
Pytest configuration and shared fixtures.

Adds the project root to the Python path so tests can import domain,
services, providers and api, and provides fake provider clients that record
every call instead of talking to Resend or the CRM.
"""

import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from providers.crm_client import CrmResponse  # noqa: E402
from services.config import RelayConfig  # noqa: E402
from services.rate_limiter import RateLimiter  # noqa: E402
from services.runtime import RelayClients  # noqa: E402


class FakeEmailClient:
    """Records sends; optionally raises on the Nth call (1-based)."""

    def __init__(self, fail_on_call: Optional[int] = None) -> None:
        self.sent: List[Dict[str, str]] = []
        self.fail_on_call = fail_on_call
        self.calls = 0

    def send(self, *, sender: str, recipient: str, subject: str, html: str) -> str:
        self.calls += 1
        if self.fail_on_call == self.calls:
            raise RuntimeError("provider unavailable")
        self.sent.append({"sender": sender, "recipient": recipient, "subject": subject, "html": html})
        return f"msg-{self.calls}"


class FakeCrmClient:
    def __init__(self, status_code: int = 200, body: Optional[dict] = None, error: Optional[Exception] = None) -> None:
        self.status_code = status_code
        self.body = body
        self.error = error
        self.payloads: List[Mapping[str, Any]] = []

    def post(self, payload: Mapping[str, Any]) -> CrmResponse:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return CrmResponse(status_code=self.status_code, body=self.body)


class FakeClock:
    """Manually advanced clock in epoch milliseconds."""

    def __init__(self, start: float = 1_700_000_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def config() -> RelayConfig:
    return RelayConfig(
        resend_api_key="re_test",
        business_email="sales@example.com",
        business_sender="website@example.com",
        customer_sender="hello@example.com",
        crm_webhook_url="https://crm.example.com/webhook",
        crm_webhook_key="crm-key",
    )


@pytest.fixture
def email_client() -> FakeEmailClient:
    return FakeEmailClient()


@pytest.fixture
def crm_client() -> FakeCrmClient:
    return FakeCrmClient(status_code=201, body={"id": "enq-1", "ok": True})


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def clients(email_client: FakeEmailClient, crm_client: FakeCrmClient) -> RelayClients:
    return RelayClients(rate_limiter=RateLimiter(), email=email_client, crm=crm_client)


@pytest.fixture
def valid_payload() -> Dict[str, Any]:
    """Utilities comparison enquiry filled in at human speed."""
    return {
        "name": "Jane Doe",
        "businessName": "Acme Ltd",
        "email": "jane@acme.com",
        "phone": "07000000000",
        "currentSupplier": "EDF",
        "formStartedAt": int(time.time() * 1000) - 5000,
    }
