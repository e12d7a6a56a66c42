from __future__ import annotations

import logging
from typing import Any, Dict, List

from django.core.exceptions import PermissionDenied
from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response

from core.db_errors import map_database_error
from core.errors import AppError

logger = logging.getLogger(__name__)


def _envelope(error: str, source: str, code=None, errors=None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": error, "source": source}
    if code:
        body["code"] = code
    if errors:
        body["errors"] = errors
    return body


def _flatten_serializer_errors(detail, prefix: str = "") -> List[Dict[str, str]]:
    out: List[Dict[str, str]] = []
    if isinstance(detail, dict):
        for key, value in detail.items():
            field = f"{prefix}.{key}" if prefix else str(key)
            out.extend(_flatten_serializer_errors(value, field))
    elif isinstance(detail, list):
        for item in detail:
            if isinstance(item, (dict, list)):
                out.extend(_flatten_serializer_errors(item, prefix))
            else:
                out.append({"field": prefix or "non_field_errors", "message": str(item)})
    else:
        out.append({"field": prefix or "non_field_errors", "message": str(detail)})
    return out


def api_exception_handler(exc, context):
    """
    Single boundary handler: maps every error raised by a view to
    ``{error, source, code?, errors?}``.
    """
    if isinstance(exc, AppError):
        body = _envelope(exc.message, "application", exc.code, exc.errors)
        return Response(body, status=exc.status_code)

    if isinstance(exc, DatabaseError):
        mapped = map_database_error(exc)
        if mapped.status_code >= 500:
            logger.exception("Database error in %s", context.get("view"))
        return Response(_envelope(mapped.message, "database", mapped.code), status=mapped.status_code)

    if isinstance(exc, exceptions.ValidationError):
        errors = _flatten_serializer_errors(exc.detail)
        return Response(
            _envelope("Validation failed", "validation", "VALIDATION_ERROR", errors),
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, Http404):
        return Response(_envelope(str(exc) or "Not found", "application"), status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, PermissionDenied):
        return Response(_envelope(str(exc) or "Forbidden", "application"), status=status.HTTP_403_FORBIDDEN)

    if isinstance(exc, exceptions.APIException):
        codes = exc.get_codes()
        code = codes if isinstance(codes, str) else None
        response = Response(_envelope(str(exc.detail), "application", code), status=exc.status_code)
        auth_header = getattr(exc, "auth_header", None)
        if auth_header:
            response["WWW-Authenticate"] = auth_header
        if getattr(exc, "wait", None):
            response["Retry-After"] = "%d" % exc.wait
        return response

    logger.exception("Unhandled error in %s", context.get("view"))
    return Response(_envelope("Internal server error", "system"), status=status.HTTP_500_INTERNAL_SERVER_ERROR)
