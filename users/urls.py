"""Authentication routes under /api/v1/auth/."""

from django.urls import path

from .views import RefreshView, SignInView

urlpatterns = [
    path("auth/token/", SignInView.as_view(), name="token_obtain_pair"),
    path("auth/token/refresh/", RefreshView.as_view(), name="token_refresh"),
]
