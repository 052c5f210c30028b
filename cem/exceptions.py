"""
Exception handling shared by every API view.

All errors leave the API in the same envelope as successful responses:
``{"success": false, "message": "..."}``. Validation errors collapse to the
first message, unexpected errors are logged and answered with a generic 500.
"""
import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler
from rest_framework_simplejwt.exceptions import InvalidToken

logger = logging.getLogger('cem')

GENERIC_ERROR_MESSAGE = 'خطای داخلی سرور'

DEFAULT_MESSAGES = {
    exceptions.NotAuthenticated: 'توکن یافت نشد',
    InvalidToken: 'توکن نامعتبر است',
    exceptions.AuthenticationFailed: 'احراز هویت ناموفق بود',
    exceptions.PermissionDenied: 'شما دسترسی لازم برای این عملیات را ندارید',
    exceptions.NotFound: 'مورد درخواستی یافت نشد',
    exceptions.MethodNotAllowed: 'متد درخواست مجاز نیست',
    exceptions.ParseError: 'داده‌های ارسالی نامعتبر است',
}


def first_error(detail, default='داده‌های ارسالی نامعتبر است'):
    """Return the first human readable message nested in a DRF error detail."""
    while isinstance(detail, (list, tuple, dict)):
        if not detail:
            return default
        if isinstance(detail, dict):
            detail = next(iter(detail.values()))
        else:
            detail = detail[0]
    return str(detail) if detail else default


def _message_for(exc):
    if isinstance(exc, exceptions.ValidationError):
        return first_error(exc.detail)
    detail = getattr(exc, 'detail', None)
    if isinstance(detail, str) and detail != str(exc.default_detail):
        return str(detail)
    for exc_class, message in DEFAULT_MESSAGES.items():
        if isinstance(exc, exc_class):
            return message
    return first_error(detail, default=GENERIC_ERROR_MESSAGE)


def envelope_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            "Unhandled error in %s",
            view.__class__.__name__ if view is not None else 'view',
            exc_info=exc,
        )
        return Response(
            {'success': False, 'message': GENERIC_ERROR_MESSAGE},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    # Http404 and Django's PermissionDenied were already converted by DRF
    if response.status_code == status.HTTP_404_NOT_FOUND and not isinstance(exc, exceptions.APIException):
        exc = exceptions.NotFound()
    elif response.status_code == status.HTTP_403_FORBIDDEN and not isinstance(exc, exceptions.APIException):
        exc = exceptions.PermissionDenied()

    response.data = {'success': False, 'message': _message_for(exc)}
    return response
