"""
Tests for `domain/dispatch.py`.
"""

from __future__ import annotations

from domain.dispatch import ChannelOutcome, DispatchChannel, DispatchResult


def test_empty_result_is_not_success() -> None:
    result = DispatchResult()
    assert result.success is False
    assert result.partial is False


def test_partial_delivery() -> None:
    result = DispatchResult()
    result.record(ChannelOutcome(DispatchChannel.BUSINESS_NOTIFICATION, success=True, reference="m1"))
    result.record(ChannelOutcome(DispatchChannel.CUSTOMER_CONFIRMATION, success=False, error="boom"))

    assert result.success is False
    assert result.partial is True
    assert result.failed_channels == [DispatchChannel.CUSTOMER_CONFIRMATION]


def test_total_failure_is_not_partial() -> None:
    result = DispatchResult()
    result.record(ChannelOutcome(DispatchChannel.CRM_WEBHOOK, success=False))

    assert result.partial is False
    assert result.failed_channels == [DispatchChannel.CRM_WEBHOOK]
