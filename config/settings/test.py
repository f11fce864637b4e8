from .base import *  # noqa
from .base import REST_FRAMEWORK as BASE_REST_FRAMEWORK
from .base import SHOP as BASE_SHOP

DEBUG = False

# In-memory SQLite keeps the suite independent of any external database
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Plain storage so tests never need collected static manifests
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

SHOP = {
    **BASE_SHOP,
    "CURRENCY_SYMBOL": "$",
    "ORDER_PAGE_SIZE": 10,
    "BUYER_COOKIE_NAME": "BuyerId",
    "BUYER_COOKIE_SECURE": False,
}

# Relax throttling for tests to reduce flakiness
REST_FRAMEWORK = {**BASE_REST_FRAMEWORK}
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {
    **BASE_REST_FRAMEWORK.get("DEFAULT_THROTTLE_RATES", {}),
    "user": "10000/min",
    "anon": "10000/min",
    "signin": "1000/min",
    "token_refresh": "1000/min",
    "cart": "1000/min",
    "cart_write": "1000/min",
    "orders": "1000/min",
    "orders_write": "1000/min",
}
