"""Store-wide settings read from the ``[custom]`` section of domain.toml."""

from dataclasses import dataclass

from protean.utils.globals import current_domain


@dataclass(frozen=True)
class StoreSettings:
    tax_percent: float = 0.0
    shipping_flat: float = 0.0
    currency: str = "usd"


def store_settings() -> StoreSettings:
    custom = current_domain.config.get("custom") or {}
    return StoreSettings(
        tax_percent=float(custom.get("TAX_PERCENT", 0) or 0),
        shipping_flat=float(custom.get("SHIPPING_FLAT", 0) or 0),
        currency=str(custom.get("CURRENCY", "usd")).lower(),
    )
