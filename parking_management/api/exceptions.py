import logging
import traceback

from django.conf import settings
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = 'something went wrong please try again later!'


def first_message(detail) -> str:
    """Reduce DRF error detail (dict, list or string) to its first message."""
    if isinstance(detail, dict):
        if not detail:
            return DEFAULT_ERROR_MESSAGE
        return first_message(next(iter(detail.values())))
    if isinstance(detail, (list, tuple)):
        if not detail:
            return DEFAULT_ERROR_MESSAGE
        return first_message(detail[0])
    return str(detail)


def error_body(message: str, exc: Exception) -> dict:
    body = {'success': False, 'message': message}
    if settings.DEBUG:
        body['stack'] = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def envelope_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        view = context.get('view')
        logger.exception('Unhandled error in %s', type(view).__name__, exc_info=exc)
        return Response(error_body(DEFAULT_ERROR_MESSAGE, exc), status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if response.status_code >= 500:
        logger.error('Server error: %s', exc)
    response.data = error_body(first_message(response.data), exc)
    return response
