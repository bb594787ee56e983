"""Coupon validation and discount calculation.

Rejections are checked in a fixed order: unknown code, expiry, usage limit,
minimum order value. The first failing rule is reported.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.coupon.coupon import Coupon, normalize_code
from storefront.shared.money import as_decimal, to_cents


@dataclass(frozen=True)
class CouponQuote:
    code: str
    discount_amount: float
    final_total: float


def _aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def evaluate(coupon: Coupon, subtotal, now: datetime | None = None) -> CouponQuote:
    """Check ``coupon`` against ``subtotal`` and compute the discount."""
    now = now or datetime.now(UTC)

    if _aware(coupon.expiry_date) < _aware(now):
        raise ValidationError({"coupon_code": ["This coupon has expired"]})

    if coupon.usage_limit is not None and (coupon.used_count or 0) >= coupon.usage_limit:
        raise ValidationError({"coupon_code": ["This coupon has reached its usage limit"]})

    total = as_decimal(subtotal)
    minimum = as_decimal(coupon.min_total)
    if total < minimum:
        raise ValidationError({"coupon_code": [f"Minimum order value of ${minimum:.2f} required for this coupon"]})

    if coupon.is_flat:
        raw_discount = min(as_decimal(coupon.discount), total)
    else:
        raw_discount = total * as_decimal(coupon.discount) / 100

    return CouponQuote(
        code=coupon.code,
        discount_amount=to_cents(raw_discount),
        final_total=to_cents(total - raw_discount),
    )


def find_coupon(code) -> Coupon:
    coupon = current_domain.repository_for(Coupon).find_by_code(code)
    if coupon is None:
        raise ValidationError({"coupon_code": ["Coupon not found"]})
    return coupon


def apply_coupon(code, subtotal, now: datetime | None = None) -> CouponQuote:
    """Quote a coupon against a subtotal without consuming a use."""
    return evaluate(find_coupon(normalize_code(code)), subtotal, now=now)
