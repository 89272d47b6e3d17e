from typing import Any, Optional

from rest_framework import status as http_status
from rest_framework.response import Response


def envelope(
    data: Any = None,
    message: Optional[str] = None,
    status: int = http_status.HTTP_200_OK,
    count: Optional[int] = None,
) -> Response:
    body = {'success': True}
    if count is not None:
        body['count'] = count
    if data is not None:
        body['data'] = data
    if message is not None:
        body['message'] = message
    return Response(body, status=status)
