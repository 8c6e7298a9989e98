"""
Core views for the EMI Calculator service.
"""

import logging

from django.http import JsonResponse
from django.utils import timezone

from apps.core.utils import uptime_seconds

logger = logging.getLogger(__name__)


def index(request):
    """
    GET /

    Describe the service and list its API endpoints.
    """
    return JsonResponse(
        {
            'message': 'EMI Calculator API is running!',
            'endpoints': {
                'calculate': 'POST /api/calculate-emi',
                'history': 'GET /api/calculation-history',
                'stats': 'GET /api/stats',
            },
        },
        status=200,
    )


def health_check(request):
    """
    GET /health

    Simple health check endpoint for Docker and load balancer health checks.
    Does not touch the calculation history.
    """
    return JsonResponse(
        {
            'status': 'OK',
            'timestamp': timezone.now().isoformat(),
            'uptime': uptime_seconds(),
        },
        status=200,
    )


def not_found(request, exception=None):
    """JSON replacement for Django's HTML 404 page."""
    logger.debug("No route for %s %s", request.method, request.path)
    return JsonResponse(
        {'success': False, 'message': 'Not found'},
        status=404,
    )
