"""Domain events for the Coupon aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Coupon")
class CouponCreated:
    """A promotional code was created."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    discount = Float(required=True)
    is_flat = Boolean(required=True)
    expiry_date = DateTime(required=True)
    usage_limit = Integer()
    min_total = Float()


@storefront.event(part_of="Coupon")
class CouponUpdated:
    """Terms of a promotional code were changed."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)


@storefront.event(part_of="Coupon")
class CouponRedeemed:
    """A coupon use was consumed by a committed order."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    code = String(required=True)
    used_count = Integer(required=True)
