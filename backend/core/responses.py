from __future__ import annotations

from typing import Any

from rest_framework import status as http_status
from rest_framework.response import Response


def envelope(
    data: Any = None,
    *,
    message: str = "",
    status: int = http_status.HTTP_200_OK,
    **extra: Any,
) -> Response:
    """Wrap a payload in the `{success, message, data}` shape used by every endpoint."""

    body: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return Response(body, status=status)


def failure(message: str, *, status: int = http_status.HTTP_400_BAD_REQUEST, error: Any = None) -> Response:
    body: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return Response(body, status=status)
