from django.conf import settings
from drf_spectacular.extensions import OpenApiAuthenticationExtension
from rest_framework.authentication import BaseAuthentication

from .tokens import verify_admin_token


class AdminTokenAuthentication(BaseAuthentication):
    """
    Re-checks the admin_token cookie for every admin API request, independently
    of AdminAccessMiddleware. There is a single admin identity, so no user object
    is attached: request.auth carries the verified token and request.user stays None.
    """

    def authenticate(self, request):
        token = request.COOKIES.get(settings.ADMIN_COOKIE_NAME)
        if not token or not verify_admin_token(token):
            return None
        return (None, token)

    def authenticate_header(self, request):
        # Any value here makes DRF answer 401 rather than 403
        return 'Cookie realm="admin"'


class AdminTokenScheme(OpenApiAuthenticationExtension):
    target_class = "authentication.backends.AdminTokenAuthentication"
    name = "adminCookie"

    def get_security_definition(self, auto_schema):
        return {
            "type": "apiKey",
            "in": "cookie",
            "name": settings.ADMIN_COOKIE_NAME,
        }
