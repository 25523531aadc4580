"""Instance information.

Implements:
- GET /api/3

https://github.com/bakalari-api/bakalari-api-v3/blob/master/moduly/API_info.md
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import Response

from ..responses import info_payload, json_response
from . import get_versions


async def get_info(request: Request) -> Response:
    api_version, app_version = get_versions(request).read()
    return json_response(info_payload(api_version, app_version))
