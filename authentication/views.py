import logging

from django.db import connection, DatabaseError
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiExample
from rest_framework import status, permissions
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.response import Response

from .permissions import IsAdmin
from .tokens import (
    create_admin_token, verify_password, set_admin_cookie, clear_admin_cookie,
    request_has_admin_token,
)

logger = logging.getLogger(__name__)


# =============== ADMIN SESSION ===============

@extend_schema(
    summary="Admin Login",
    description="""
    Check the shared admin password. On success the admin_token cookie is set
    (HttpOnly, SameSite=Strict, 7 days).
    """,
    request={
        'application/json': {
            'type': 'object',
            'properties': {'password': {'type': 'string'}},
            'required': ['password'],
        }
    },
    responses={
        200: {'type': 'object', 'properties': {'success': {'type': 'boolean'}}},
        400: {'description': 'Malformed request body'},
        401: {'description': 'Invalid password'},
    },
    examples=[
        OpenApiExample('Admin Login', value={"password": "correct horse battery staple"}),
    ],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def admin_login(request):
    if not isinstance(request.data, dict):
        return Response({'error': 'Invalid request'}, status=status.HTTP_400_BAD_REQUEST)

    password = request.data.get('password')
    if not password or not verify_password(password):
        logger.warning("Rejected admin login attempt")
        return Response({'error': 'Invalid password'}, status=status.HTTP_401_UNAUTHORIZED)

    token = create_admin_token()
    if token is None:
        return Response({'error': 'Invalid password'}, status=status.HTTP_401_UNAUTHORIZED)

    logger.info("Admin logged in")
    response = Response({'success': True})
    return set_admin_cookie(response, token)


@extend_schema(
    summary="Verify Admin Session",
    description="Report whether the request carries a valid admin_token cookie. Never fails.",
    responses={200: {'type': 'object', 'properties': {'authenticated': {'type': 'boolean'}}}},
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def admin_verify(request):
    return Response({'authenticated': request_has_admin_token(request)})


@extend_schema(
    summary="Admin Logout",
    description="Clear the admin_token cookie.",
    request=None,
    responses={200: {'type': 'object', 'properties': {'success': {'type': 'boolean'}}}},
)
@api_view(['POST'])
@permission_classes([IsAdmin])
def admin_logout(request):
    logger.info("Admin logged out")
    response = Response({'success': True})
    return clear_admin_cookie(response)


# =============== SYSTEM ===============

@extend_schema(
    summary="System Health Check",
    description="Check system health and database connectivity",
    responses={
        200: {
            'type': 'object',
            'properties': {
                'status': {'type': 'string'},
                'timestamp': {'type': 'string'},
                'database': {'type': 'string'},
                'version': {'type': 'string'},
            }
        }
    }
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def health_check(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError as e:
        logger.error(f"Health check failed: {e}")
        return Response({
            'status': 'unhealthy',
            'timestamp': timezone.now().isoformat(),
            'database': 'disconnected',
        }, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    return Response({
        'status': 'healthy',
        'timestamp': timezone.now().isoformat(),
        'database': 'connected',
        'version': '1.0.0'
    })
