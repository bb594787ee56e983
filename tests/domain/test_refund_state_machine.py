"""Tests for the Refund aggregate state machine."""

import pytest
from protean.exceptions import ValidationError
from storefront.refund.events import RefundRequested, RefundStatusChanged
from storefront.refund.refund import Refund, RefundStatus


def _make_refund(status=None):
    refund = Refund.request(order_id="ord-1", customer_id="cust-001", amount=99.98, reason="Damaged")
    if status is not None:
        refund.status = status.value
    return refund


class TestRefundRequest:
    def test_starts_pending(self):
        refund = _make_refund()
        assert refund.status == RefundStatus.PENDING.value
        assert refund.amount == 99.98

    def test_raises_refund_requested(self):
        assert isinstance(_make_refund()._events[-1], RefundRequested)


class TestRefundTransitions:
    @pytest.mark.parametrize(
        "current,target",
        [
            (RefundStatus.PENDING, RefundStatus.APPROVED),
            (RefundStatus.PENDING, RefundStatus.REJECTED),
            (RefundStatus.APPROVED, RefundStatus.COMPLETED),
        ],
    )
    def test_allowed(self, current, target):
        refund = _make_refund(status=current)
        refund.transition_to(target)
        assert refund.status == target.value
        assert isinstance(refund._events[-1], RefundStatusChanged)

    @pytest.mark.parametrize(
        "current,target",
        [
            (RefundStatus.REJECTED, RefundStatus.COMPLETED),
            (RefundStatus.REJECTED, RefundStatus.APPROVED),
            (RefundStatus.COMPLETED, RefundStatus.PENDING),
            (RefundStatus.PENDING, RefundStatus.COMPLETED),
            (RefundStatus.APPROVED, RefundStatus.REJECTED),
        ],
    )
    def test_rejected(self, current, target):
        refund = _make_refund(status=current)
        with pytest.raises(ValidationError):
            refund.transition_to(target)
        assert refund.status == current.value
