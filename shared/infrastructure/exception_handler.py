"""
REST framework exception handler.

Renders domain errors raised by services as regular API responses and
hands everything else to DRF's default handler.
"""

from __future__ import annotations

import logging

from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.base import DomainError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):
    """Translate ``DomainError`` into ``{"detail", "code"}`` responses."""
    if isinstance(exc, DomainError):
        request = context.get("request")
        logger.info(
            "Domain error %s on %s: %s",
            exc.code,
            request.path if request is not None else None,
            exc.message,
        )
        return Response(exc.to_dict(), status=exc.status_code)

    return exception_handler(exc, context)
