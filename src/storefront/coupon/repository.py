from storefront.coupon.coupon import Coupon, normalize_code
from storefront.domain import storefront


@storefront.repository(part_of=Coupon)
class CouponRepository:
    def find_by_code(self, code) -> Coupon | None:
        return self._dao.query.filter(code=normalize_code(code)).all().first

    def list_all(self) -> list[Coupon]:
        return self._dao.query.order_by("-created_at").all().items
