"""Orders API endpoints.

Order creation turns the authenticated user's cart into an order; history
and detail views read the frozen snapshots.
"""

from common.validation import raise_for_errors
from django_filters import rest_framework as filters
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, inline_serializer
from rest_framework import generics, status
from rest_framework import serializers as rf_serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from . import selectors
from .filters import OrderFilterSet
from .pagination import OrderHistoryPagination
from .serializers import OrderDetailSerializer
from .services import create_order_from_cart
from .validators import validate_history_query

ErrorResponse = inline_serializer(name="OrderErrorResponse", fields={"detail": rf_serializers.CharField()})

ORDER_EXAMPLE = OpenApiExample(
    "Order",
    value={
        "code": "ORD-250114093012-482",
        "total": "$2,950",
        "sub_total": "$3,000",
        "purchased_at": "2025-01-14T09:30:12.345678+00:00",
        "items": [
            {
                "title": "Denim jacket",
                "description": "Washed blue denim, size M",
                "image_url": "https://res.cloudinary.com/demo/image/upload/v1/jacket.png",
                "price_at_moment": "$1,000",
                "discount_at_moment": 0,
                "quantity": 2,
            }
        ],
    },
    response_only=True,
)


class OrderListCreateView(generics.ListAPIView):
    """List the user's orders (GET) or place an order from their cart (POST)."""

    permission_classes = [IsAuthenticated]
    serializer_class = OrderDetailSerializer
    pagination_class = OrderHistoryPagination
    filter_backends = [filters.DjangoFilterBackend]
    filterset_class = OrderFilterSet

    @property
    def throttle_scope(self):
        return "orders_write" if self.request.method == "POST" else "orders"

    def get_queryset(self):
        return selectors.list_orders_for_user(user_id=self.request.user.id)

    @extend_schema(
        tags=["Orders"],
        summary="List orders",
        description="Paginated order history for the current user, newest first.",
        parameters=[
            OpenApiParameter(
                name="search",
                description="Matches order code, item title or item description",
                required=False,
                type=str,
            ),
            OpenApiParameter(name="page", description="Page number", required=False, type=int),
            OpenApiParameter(name="page_size", description="Items per page", required=False, type=int),
        ],
    )
    def get(self, request, *args, **kwargs):
        raise_for_errors(validate_history_query(request.query_params))
        return super().get(request, *args, **kwargs)

    @extend_schema(
        tags=["Orders"],
        summary="Create order",
        description=(
            "Creates an order from the authenticated user's cart, decrements stock and empties the cart in one "
            "transaction. Run the cart checkout first to reconcile the cart against stock."
        ),
        request=None,
        responses={
            201: inline_serializer(name="OrderCreatedResponse", fields={"code": rf_serializers.CharField()}),
            400: ErrorResponse,
            404: ErrorResponse,
        },
        examples=[
            OpenApiExample(
                "Created", value={"code": "ORD-250114093012-482"}, response_only=True, status_codes=["201"]
            ),
            OpenApiExample(
                "Empty cart", value={"detail": "The cart is empty."}, response_only=True, status_codes=["400"]
            ),
        ],
    )
    def post(self, request):
        code = create_order_from_cart(user_id=request.user.id)
        return Response({"code": code}, status=status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    """Retrieve a single order of the authenticated user by code."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "orders"

    @extend_schema(
        tags=["Orders"],
        summary="Get order detail",
        responses={200: OrderDetailSerializer, 404: ErrorResponse},
        examples=[ORDER_EXAMPLE],
    )
    def get(self, request, code: str):
        order = selectors.get_order_by_code(code=code, user_id=request.user.id)
        return Response(OrderDetailSerializer(order, context={"request": request}).data)
