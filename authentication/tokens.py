import hashlib
import hmac
import logging
import re

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

TOKEN_LABEL = "food-reviews-admin"
HEX_TOKEN = re.compile(r"[0-9a-fA-F]+")


class SharedSecretTokenService:
    """
    Stateless admin token derived from the shared admin password.

    The token is HMAC-SHA256(key=secret, msg=TOKEN_LABEL) in hex: the same
    secret always yields the same token and nothing is stored server side.
    Expiry lives only in the cookie max-age. With no secret configured every
    check fails closed.
    """

    def __init__(self, secret=None):
        self._secret = secret

    @property
    def secret(self):
        if self._secret is not None:
            return self._secret
        return getattr(settings, "ADMIN_PASSWORD", "") or ""

    def create_token(self):
        secret = self.secret
        if not secret:
            logger.warning("ADMIN_PASSWORD is not configured; refusing to mint an admin token")
            return None
        return hmac.new(secret.encode(), TOKEN_LABEL.encode(), hashlib.sha256).hexdigest()

    def verify_token(self, candidate):
        if not candidate or not isinstance(candidate, str):
            return False

        expected = self.create_token()
        if expected is None:
            return False

        # Digest size is fixed, so the length says nothing about the secret
        if len(candidate) != len(expected) or not HEX_TOKEN.fullmatch(candidate):
            return False
        return hmac.compare_digest(bytes.fromhex(candidate), bytes.fromhex(expected))

    def verify_password(self, candidate):
        secret = self.secret
        if not secret or not isinstance(candidate, str):
            return False
        return hmac.compare_digest(candidate.encode(), secret.encode())


def get_token_service():
    return import_string(settings.ADMIN_TOKEN_SERVICE)()


def create_admin_token():
    return get_token_service().create_token()


def verify_admin_token(token):
    return get_token_service().verify_token(token)


def verify_password(password):
    return get_token_service().verify_password(password)


def set_admin_cookie(response, token):
    response.set_cookie(
        settings.ADMIN_COOKIE_NAME,
        token,
        max_age=settings.ADMIN_COOKIE_MAX_AGE,
        path="/",
        secure=settings.ADMIN_COOKIE_SECURE,
        httponly=True,
        samesite="Strict",
    )
    return response


def clear_admin_cookie(response):
    response.delete_cookie(settings.ADMIN_COOKIE_NAME, path="/", samesite="Strict")
    return response


def request_has_admin_token(request):
    return verify_admin_token(request.COOKIES.get(settings.ADMIN_COOKIE_NAME))
