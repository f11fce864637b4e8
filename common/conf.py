"""Immutable shop configuration built from ``settings.SHOP``.

Services and serializers take a ``ShopConfig`` argument and fall back to
``get_shop_config()`` when none is passed. The settings are read on every
call so ``override_settings`` works in tests.
"""

from dataclasses import dataclass

from django.conf import settings

DEFAULTS = {
    "DEFAULT_IMAGE_URL": "https://res.cloudinary.com/demo/image/upload/v1/default-product.png",
    "CURRENCY_SYMBOL": "$",
    "ORDER_PAGE_SIZE": 10,
    "BUYER_COOKIE_NAME": "BuyerId",
    "BUYER_COOKIE_MAX_AGE_DAYS": 30,
    "BUYER_COOKIE_SECURE": True,
}


@dataclass(frozen=True)
class ShopConfig:
    default_image_url: str
    currency_symbol: str
    order_page_size: int
    buyer_cookie_name: str
    buyer_cookie_max_age_days: int
    buyer_cookie_secure: bool

    @property
    def buyer_cookie_max_age(self) -> int:
        """Cookie max age in seconds."""
        return self.buyer_cookie_max_age_days * 24 * 60 * 60


def get_shop_config() -> ShopConfig:
    values = {**DEFAULTS, **getattr(settings, "SHOP", {})}
    return ShopConfig(
        default_image_url=str(values["DEFAULT_IMAGE_URL"]),
        currency_symbol=str(values["CURRENCY_SYMBOL"]),
        order_page_size=int(values["ORDER_PAGE_SIZE"]),
        buyer_cookie_name=str(values["BUYER_COOKIE_NAME"]),
        buyer_cookie_max_age_days=int(values["BUYER_COOKIE_MAX_AGE_DAYS"]),
        buyer_cookie_secure=bool(values["BUYER_COOKIE_SECURE"]),
    )
