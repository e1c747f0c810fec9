from django.db import IntegrityError
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework.exceptions import ValidationError
from rest_framework import status
import logging

logger = logging.getLogger(__name__)


class BusinessLogicException(Exception):
    """
    Raised when a domain rule is violated (e.g. 'Order ID already exists').
    """
    def __init__(self, message, code="business_error", status_code=status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


def custom_exception_handler(exc, context):
    """
    Every error body leaves the API as {"message": ..., "code"?: ..., "errors"?: ...}
    so the SPA can always surface `response.data.message`.
    """
    if isinstance(exc, BusinessLogicException):
        return Response(
            {"message": exc.message, "code": exc.code},
            status=exc.status_code
        )

    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error on %s: %s", context.get("view").__class__.__name__, exc)
        return Response(
            {"message": "Record conflicts with an existing one", "code": "integrity_error"},
            status=status.HTTP_400_BAD_REQUEST
        )

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    # If response is None, it's an unhandled server error (500)
    if response is None:
        logger.error(f"Unhandled Exception: {exc}", exc_info=True)
        return Response(
            {"message": "Internal Server Error", "code": "server_error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if isinstance(exc, ValidationError):
        response.data = {"message": "Validation error", "errors": response.data}
    elif isinstance(response.data, dict) and "detail" in response.data:
        detail = response.data["detail"]
        response.data = {"message": str(detail), "code": getattr(detail, "code", None)}

    return response
