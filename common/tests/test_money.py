from common.conf import ShopConfig, get_shop_config
from common.money import format_money


def test_formats_with_symbol_and_grouping():
    assert format_money(2550) == "$2,550"
    assert format_money(0) == "$0"
    assert format_money(1234567) == "$1,234,567"


def test_negative_amount_puts_sign_first():
    assert format_money(-450) == "-$450"


def test_uses_configured_symbol(settings):
    settings.SHOP = {**settings.SHOP, "CURRENCY_SYMBOL": "€"}
    assert format_money(1000) == "€1,000"


def test_explicit_config_wins():
    config = ShopConfig(
        default_image_url="https://img.example.com/d.png",
        currency_symbol="£",
        order_page_size=10,
        buyer_cookie_name="BuyerId",
        buyer_cookie_max_age_days=30,
        buyer_cookie_secure=False,
    )
    assert format_money(999, config) == "£999"


def test_config_merges_defaults(settings):
    settings.SHOP = {"ORDER_PAGE_SIZE": "25"}
    config = get_shop_config()
    assert config.order_page_size == 25
    assert config.buyer_cookie_name == "BuyerId"
    assert config.buyer_cookie_max_age == 30 * 24 * 60 * 60
