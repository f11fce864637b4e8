"""Buyer identity middleware.

Every visitor carries an opaque buyer id in an HttpOnly cookie. Carts are
keyed by it until the visitor signs in and the cart is associated with
their account.
"""

import logging
import uuid

from common.conf import get_shop_config

logger = logging.getLogger("tienda.cart")


class BuyerIdMiddleware:
    """Expose ``request.buyer_id``, issuing a new cookie when it is missing."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        config = get_shop_config()
        buyer_id = request.COOKIES.get(config.buyer_cookie_name)
        issued = False
        if not buyer_id:
            buyer_id = str(uuid.uuid4())
            issued = True
            logger.info("cart.buyer_issued", extra={"event": "cart.buyer_issued", "buyer_id": buyer_id})
        request.buyer_id = buyer_id

        response = self.get_response(request)

        if issued:
            response.set_cookie(
                config.buyer_cookie_name,
                buyer_id,
                max_age=config.buyer_cookie_max_age,
                path="/",
                secure=config.buyer_cookie_secure,
                httponly=True,
                samesite="Lax",
            )
        return response
