from rest_framework import status
from rest_framework.exceptions import (  # noqa: F401
    APIException,
    AuthenticationFailed,
    NotFound,
    PermissionDenied,
    ValidationError,
)


class ConflictError(APIException):
    """Overlapping interval or duplicate entity; the client may retry."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource conflict.'
    default_code = 'conflict'


class InvalidStateError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid state for this operation.'
    default_code = 'invalid_state'


class ConfigurationError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Invalid configuration.'
    default_code = 'configuration_error'
