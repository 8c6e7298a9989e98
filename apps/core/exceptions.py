"""
Custom exceptions and DRF exception handler for the EMI Calculator service.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class MissingFieldError(APIException):
    """Raised when a required calculation input is absent."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'All fields are required'
    default_code = 'missing_field'


class InvalidInputError(APIException):
    """Raised when a calculation input is present but non-numeric or non-positive."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid input values'
    default_code = 'invalid_input'


class StorageFailureError(APIException):
    """Raised when the calculation history cannot be read or written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Database error'
    default_code = 'storage_failure'


def _message_from(detail):
    """Flatten a DRF error detail (str, list or dict) into one message."""
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _message_from(detail['detail'])
        return '; '.join(
            f"{key}: {_message_from(value)}" for key, value in detail.items()
        )
    if isinstance(detail, list):
        return ' '.join(_message_from(item) for item in detail)
    return str(detail)


def custom_exception_handler(exc, context):
    """
    Custom DRF exception handler that returns consistent error responses.

    Every error body has the shape ``{"success": false, "message": ...}``.
    Unhandled exceptions are logged and turned into a 500.
    """
    response = exception_handler(exc, context)

    if response is not None:
        if response.status_code >= 500:
            logger.error(
                "Server error in %s: %s",
                context.get('view', 'unknown'),
                exc,
            )
        response.data = {
            'success': False,
            'message': _message_from(response.data),
        }
    else:
        # Unhandled exceptions — log and return 500
        logger.exception(
            "Unhandled exception in %s",
            context.get('view', 'unknown'),
            exc_info=exc,
        )
        response = Response(
            {
                'success': False,
                'message': 'An unexpected error occurred. Please try again later.',
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
