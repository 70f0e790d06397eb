# exceptions.py
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, ParseError
from django.core.exceptions import ValidationError
from django.db import IntegrityError
import logging
from django.conf import settings

logger = logging.getLogger(__name__)


class Unauthorized(NotAuthenticated):
    default_detail = 'Unauthorized'
    default_code = 'unauthorized'


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists'
    default_code = 'conflict'


class UpstreamFailure(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Upstream service failed'
    default_code = 'upstream_failure'


def is_unique_violation(exc):
    """Tell a uniqueness violation apart from other integrity errors."""
    cause = exc.__cause__
    code = getattr(cause, 'pgcode', None) or getattr(cause, 'sqlstate', None)
    if code:
        return code == '23505'
    message = str(exc).lower()
    return 'unique' in message or 'duplicate' in message


def first_error_message(data):
    """Reduce a DRF error payload (dict / list / string) to its first message."""
    if isinstance(data, dict):
        for value in data.values():
            return first_error_message(value)
        return 'An error occurred'
    if isinstance(data, (list, tuple)):
        return first_error_message(data[0]) if data else 'An error occurred'
    return str(data)


def custom_exception_handler(exc, context):
    """
    Custom exception handler for the admin and public API.
    Every error body is {"error": "<message>"}.
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        if response.status_code == status.HTTP_401_UNAUTHORIZED:
            message = 'Unauthorized'
        elif isinstance(exc, ParseError):
            message = 'Invalid request body'
        else:
            message = first_error_message(response.data)
        response.data = {'error': message}

    # Handle Django ValidationError
    elif isinstance(exc, ValidationError):
        logger.error(f"Validation Error: {exc}")
        response = Response({
            'error': exc.messages[0] if exc.messages else 'Validation error',
        }, status=status.HTTP_400_BAD_REQUEST)

    # Handle Django IntegrityError
    elif isinstance(exc, IntegrityError):
        logger.error(f"Integrity Error: {exc}")
        if is_unique_violation(exc):
            response = Response({
                'error': 'This operation violates a uniqueness constraint',
            }, status=status.HTTP_409_CONFLICT)
        else:
            response = Response({
                'error': 'Database integrity error',
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # Handle unexpected errors
    else:
        logger.exception("Unexpected Error: %s", exc)
        response = Response({
            'error': str(exc) if settings.DEBUG else 'Internal server error',
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return response
