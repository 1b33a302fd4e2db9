"""Map exceptions to HTTP responses.

Domain errors carry their own user-safe message. Anything else DRF
recognises keeps DRF's status code but is reshaped into the same body:

    {"error": {"code": "...", "message": "..."}}
"""

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from foodshare.domain.errors import ConsistencyViolationError, DomainError, ErrorCode
from foodshare.services.ledger import report_violation

STATUS_BY_CODE = {
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.EVENT_FULL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ALREADY_RESERVED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_RESERVED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONSISTENCY_VIOLATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_body(code: str, message: str, details=None) -> dict:
    body = {"code": code, "message": message}
    if details:
        body["details"] = details
    return {"error": body}


def foodshare_exception_handler(exc, context):
    if isinstance(exc, DomainError):
        if isinstance(exc, ConsistencyViolationError):
            report_violation(exc)
        return Response(
            error_body(exc.code.value, exc.message),
            status=STATUS_BY_CODE[exc.code],
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, ValidationError):
        response.data = error_body(
            ErrorCode.INVALID_INPUT.value, "Invalid input", details=response.data
        )
        return response

    detail = getattr(exc, "detail", None)
    code = getattr(exc, "default_code", "error")
    response.data = error_body(str(code).upper(), str(detail or exc))
    return response
