"""JWT token endpoints.

Thin subclasses of simplejwt's views so each gets its own throttle scope
and OpenAPI tag.
"""

from drf_spectacular.utils import extend_schema
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView


@extend_schema(tags=["Auth Endpoints"], summary="Obtain JWT pair")
class SignInView(TokenObtainPairView):
    throttle_scope = "signin"


@extend_schema(tags=["Auth Endpoints"], summary="Refresh access token")
class RefreshView(TokenRefreshView):
    throttle_scope = "token_refresh"
