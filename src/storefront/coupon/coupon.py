"""Coupon aggregate (CQRS) — promotional code with an optional usage cap."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String

from storefront.coupon.events import CouponCreated, CouponRedeemed, CouponUpdated
from storefront.domain import storefront


def normalize_code(code) -> str:
    return (code or "").strip().upper()


@storefront.aggregate
class Coupon:
    code = String(required=True, max_length=50, unique=True)
    discount = Float(required=True, min_value=0.0)
    is_flat = Boolean(default=False)
    expiry_date = DateTime(required=True)
    usage_limit = Integer(min_value=1)  # None means unlimited
    used_count = Integer(default=0, min_value=0)
    min_total = Float(default=0.0, min_value=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def percentage_discount_cannot_exceed_hundred(self):
        if not self.is_flat and self.discount is not None and self.discount > 100:
            raise ValidationError({"discount": ["Percentage discount cannot exceed 100"]})

    @classmethod
    def create(cls, code, discount, expiry_date, is_flat=False, usage_limit=None, min_total=0.0):
        now = datetime.now(UTC)
        coupon = cls(
            code=normalize_code(code),
            discount=discount,
            is_flat=is_flat,
            expiry_date=expiry_date,
            usage_limit=usage_limit,
            used_count=0,
            min_total=min_total or 0.0,
            created_at=now,
            updated_at=now,
        )
        coupon.raise_(
            CouponCreated(
                coupon_id=str(coupon.id),
                code=coupon.code,
                discount=discount,
                is_flat=is_flat,
                expiry_date=expiry_date,
                usage_limit=usage_limit,
                min_total=coupon.min_total,
            )
        )
        return coupon

    def update(self, **changes):
        """Apply the supplied (non-None) changes to the coupon terms."""
        with atomic_change(self):
            for field in ("discount", "is_flat", "expiry_date", "usage_limit", "min_total"):
                if changes.get(field) is not None:
                    setattr(self, field, changes[field])
            if changes.get("code"):
                self.code = normalize_code(changes["code"])
            self.updated_at = datetime.now(UTC)

        self.raise_(CouponUpdated(coupon_id=str(self.id), code=self.code))

    def redeem(self):
        if self.usage_limit is not None and (self.used_count or 0) >= self.usage_limit:
            raise ValidationError({"coupon_code": ["This coupon has reached its usage limit"]})

        self.used_count = (self.used_count or 0) + 1
        self.updated_at = datetime.now(UTC)
        self.raise_(CouponRedeemed(coupon_id=str(self.id), code=self.code, used_count=self.used_count))
