# =============== MIDDLEWARE FOR ADMIN ACCESS ===============
import logging

from django.conf import settings
from django.http import JsonResponse
from django.shortcuts import redirect
from django.urls import reverse

from .tokens import verify_admin_token

logger = logging.getLogger(__name__)


def _normalise(path):
    return path.rstrip("/") + "/"


class AdminAccessMiddleware:
    """
    Gate in front of every admin page (/admin/...) and admin API (/api/admin/...) request.

    The login page, the login endpoint and the verify endpoint stay reachable;
    everything else needs a valid admin_token cookie. API callers get a 401 JSON
    body, page callers are redirected to the login page.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = _normalise(request.path_info)

        if not self.is_protected(path) or path in self.public_paths():
            return self.get_response(request)

        token = request.COOKIES.get(settings.ADMIN_COOKIE_NAME)
        if token and verify_admin_token(token):
            return self.get_response(request)

        logger.info("Denied unauthenticated admin request %s %s", request.method, request.path)
        if path.startswith(settings.ADMIN_API_PREFIX):
            return JsonResponse({"error": "Unauthorized"}, status=401)
        return redirect("SignIn")

    @staticmethod
    def is_protected(path):
        return path.startswith(settings.ADMIN_PAGE_PREFIX) or path.startswith(settings.ADMIN_API_PREFIX)

    @staticmethod
    def public_paths():
        return {
            _normalise(reverse("SignIn")),
            _normalise(reverse("admin-login")),
            _normalise(reverse("admin-verify")),
        }
