"""URL routes for the orders app (v1)."""

from django.urls import path

from .views import OrderDetailView, OrderListCreateView

app_name = "orders"

urlpatterns = [
    path("", OrderListCreateView.as_view(), name="order-list"),
    path("<str:code>/", OrderDetailView.as_view(), name="order-detail"),
]
