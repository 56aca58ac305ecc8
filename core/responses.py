from rest_framework import status
from rest_framework.response import Response

from .exceptions import (
    AggregateRecomputeError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    AggregateRecomputeError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(exc):
    """Translate a service error into the API's `{"error": ...}` shape."""
    code = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return Response({"error": exc.message}, status=code)
