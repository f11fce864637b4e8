"""Money formatting for API responses.

Amounts are integers in the smallest currency unit everywhere else; only the
serializers turn them into display strings.
"""

from django.utils.formats import number_format

from .conf import ShopConfig, get_shop_config


def format_money(amount: int, config: ShopConfig | None = None) -> str:
    """Format an amount as ``<symbol><grouped digits>``, e.g. ``$2,550``.

    Negative amounts put the sign before the symbol.
    """
    config = config or get_shop_config()
    sign = "-" if amount < 0 else ""
    digits = number_format(abs(int(amount)), decimal_pos=0, use_l10n=True, force_grouping=True)
    return f"{sign}{config.currency_symbol}{digits}"
