"""Coupon administration — commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.coupon.coupon import Coupon, normalize_code
from storefront.domain import logger, storefront


@storefront.command(part_of="Coupon")
class CreateCoupon:
    code = String(required=True, max_length=50)
    discount = Float(required=True, min_value=0.0)
    is_flat = Boolean(default=False)
    expiry_date = DateTime(required=True)
    usage_limit = Integer(min_value=1)
    min_total = Float(default=0.0, min_value=0.0)


@storefront.command(part_of="Coupon")
class UpdateCoupon:
    coupon_id = Identifier(required=True)
    code = String(max_length=50)
    discount = Float(min_value=0.0)
    is_flat = Boolean()
    expiry_date = DateTime()
    usage_limit = Integer(min_value=1)
    min_total = Float(min_value=0.0)


@storefront.command(part_of="Coupon")
class DeleteCoupon:
    coupon_id = Identifier(required=True)


def _load(repo, coupon_id) -> Coupon:
    try:
        return repo.get(coupon_id)
    except ObjectNotFoundError:
        raise ValidationError({"coupon_id": [f"Coupon {coupon_id} not found"]})


@storefront.command_handler(part_of=Coupon)
class CouponManagementHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        if repo.find_by_code(command.code) is not None:
            raise ValidationError({"code": [f"Coupon code {normalize_code(command.code)} already exists"]})

        coupon = Coupon.create(
            code=command.code,
            discount=command.discount,
            expiry_date=command.expiry_date,
            is_flat=bool(command.is_flat),
            usage_limit=command.usage_limit,
            min_total=command.min_total,
        )
        repo.add(coupon)
        return str(coupon.id)

    @handle(UpdateCoupon)
    def update_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        coupon = _load(repo, command.coupon_id)

        if command.code:
            clash = repo.find_by_code(command.code)
            if clash is not None and str(clash.id) != str(coupon.id):
                raise ValidationError({"code": [f"Coupon code {normalize_code(command.code)} already exists"]})

        coupon.update(
            code=command.code,
            discount=command.discount,
            is_flat=command.is_flat,
            expiry_date=command.expiry_date,
            usage_limit=command.usage_limit,
            min_total=command.min_total,
        )
        repo.add(coupon)

    @handle(DeleteCoupon)
    def delete_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        coupon = _load(repo, command.coupon_id)
        repo._dao.delete(coupon)
        logger.info("coupon_deleted", coupon_id=str(coupon.id), code=coupon.code)
