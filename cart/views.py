"""DRF views for cart operations.

Views resolve the caller's buyer id (from ``BuyerIdMiddleware``) and user
id, delegate to the services, and render the resulting cart. Domain errors
propagate to ``common.exception_handler``.
"""

from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import AddItemSerializer, CartReadSerializer, UpdateItemQuantitySerializer
from .services import (
    add_item,
    associate_with_user,
    checkout_cart,
    clear_cart,
    create_or_get_cart,
    remove_item,
    update_item_quantity,
)

ErrorResponse = inline_serializer(name="CartErrorResponse", fields={"detail": rf_serializers.CharField()})

CART_EXAMPLE = OpenApiExample(
    "Cart",
    value={
        "buyer_id": "6f1c2b3a-9d7e-4f5a-8b6c-1d2e3f4a5b6c",
        "user_id": None,
        "items": [
            {
                "product_id": 7,
                "title": "Denim jacket",
                "image_url": "https://res.cloudinary.com/demo/image/upload/v1/jacket.png",
                "price": 1000,
                "quantity": 3,
                "discount": 15,
                "sub_total_price": "$3,000",
                "total_price": "$2,550",
            }
        ],
        "sub_total_price": "$3,000",
        "total_price": "$2,550",
        "unique_item_count": 1,
        "total_saved": 450,
    },
    response_only=True,
)


def buyer_of(request) -> tuple[str, int | None]:
    """Return ``(buyer_id, user_id)`` for the current request."""

    user = getattr(request, "user", None)
    user_id = user.id if user is not None and user.is_authenticated else None
    return request.buyer_id, user_id


class CartDetailView(APIView):
    """Return the caller's cart."""

    permission_classes = [AllowAny]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Get cart",
        description=(
            "Returns the cart for the buyer cookie, or for the authenticated user. "
            "Authenticated users get an empty cart created on first access."
        ),
        responses={200: CartReadSerializer},
        examples=[CART_EXAMPLE],
    )
    def get(self, request):
        buyer_id, user_id = buyer_of(request)
        cart = create_or_get_cart(buyer_id=buyer_id, user_id=user_id)
        if cart is None:
            return Response(CartReadSerializer.empty(buyer_id, user_id).data, status=status.HTTP_200_OK)
        return Response(CartReadSerializer.from_cart(cart).data, status=status.HTTP_200_OK)


class CartAddItemView(APIView):
    """Add a product to the cart."""

    permission_classes = [AllowAny]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Add item to cart",
        description="Adds units of a product, merging with an existing line. Fails when live stock is too low.",
        request=AddItemSerializer,
        responses={200: CartReadSerializer, 400: ErrorResponse, 404: ErrorResponse},
        examples=[
            OpenApiExample("Add", value={"product_id": 7, "quantity": 3}, request_only=True),
            CART_EXAMPLE,
            OpenApiExample(
                "Insufficient stock",
                value={"detail": "Not enough stock for this product. Available stock: 2"},
                response_only=True,
                status_codes=["400"],
            ),
        ],
    )
    def post(self, request):
        serializer = AddItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        buyer_id, user_id = buyer_of(request)
        cart = add_item(buyer_id=buyer_id, user_id=user_id, **serializer.validated_data)
        return Response(CartReadSerializer.from_cart(cart).data, status=status.HTTP_200_OK)


class CartItemView(APIView):
    """Update or remove a single cart line, addressed by product id."""

    permission_classes = [AllowAny]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Update cart item quantity",
        description="Overwrites the line quantity after checking live stock. A quantity of 0 removes the line.",
        request=UpdateItemQuantitySerializer,
        responses={200: CartReadSerializer, 400: ErrorResponse, 404: ErrorResponse},
        examples=[OpenApiExample("Update", value={"quantity": 2}, request_only=True), CART_EXAMPLE],
    )
    def patch(self, request, product_id: int):
        serializer = UpdateItemQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        buyer_id, user_id = buyer_of(request)
        cart = update_item_quantity(
            buyer_id=buyer_id,
            user_id=user_id,
            product_id=product_id,
            quantity=serializer.validated_data["quantity"],
        )
        return Response(CartReadSerializer.from_cart(cart).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Remove cart item",
        responses={200: CartReadSerializer, 404: ErrorResponse},
        examples=[CART_EXAMPLE],
    )
    def delete(self, request, product_id: int):
        buyer_id, user_id = buyer_of(request)
        cart = remove_item(buyer_id=buyer_id, user_id=user_id, product_id=product_id)
        return Response(CartReadSerializer.from_cart(cart).data, status=status.HTTP_200_OK)


class CartClearView(APIView):
    """Remove every line from the cart."""

    permission_classes = [AllowAny]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Clear cart",
        request=None,
        responses={200: CartReadSerializer, 404: ErrorResponse},
    )
    def post(self, request):
        buyer_id, user_id = buyer_of(request)
        cart = clear_cart(buyer_id=buyer_id, user_id=user_id)
        return Response(CartReadSerializer.from_cart(cart).data, status=status.HTTP_200_OK)


class CartCheckoutView(APIView):
    """Reconcile the cart against live stock before placing an order."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Checkout cart",
        description=(
            "Drops out-of-stock lines and lowers quantities above the available stock, then returns the "
            "adjusted cart. Does not create an order; call the orders endpoint next."
        ),
        request=None,
        responses={200: CartReadSerializer, 400: ErrorResponse, 404: ErrorResponse},
        examples=[
            CART_EXAMPLE,
            OpenApiExample(
                "Empty cart", value={"detail": "The cart is empty."}, response_only=True, status_codes=["400"]
            ),
        ],
    )
    def post(self, request):
        buyer_id, user_id = buyer_of(request)
        cart = checkout_cart(buyer_id=buyer_id, user_id=user_id)
        return Response(CartReadSerializer.from_cart(cart).data, status=status.HTTP_200_OK)


class CartAssociateView(APIView):
    """Move the buyer's anonymous cart onto the authenticated user."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Associate buyer cart with user",
        description=(
            "Call after signing in. Claims the buyer's anonymous cart, or merges it into the user's existing "
            "cart by adding quantities. A no-op when the buyer has no anonymous cart."
        ),
        request=None,
        responses={204: None},
    )
    def post(self, request):
        buyer_id, user_id = buyer_of(request)
        associate_with_user(buyer_id=buyer_id, user_id=user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
