"""Logged-in user information.

Implements:
- GET /api/3/user
- /api/3/register-notification

https://github.com/bakalari-api/bakalari-api-v3/blob/master/moduly/user.md
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import Response

from ..auth import authenticated_user
from ..responses import empty_response, json_response, user_payload
from ..tokens import campaign_category_code


async def get_user(request: Request) -> Response:
    user = authenticated_user(request)
    if user is None:
        return empty_response(401)

    return json_response(
        user_payload(
            name=user.name,
            class_name=user.class_name,
            campaign_category_code=campaign_category_code(),
        )
    )


async def register_notification(request: Request) -> Response:
    # Undocumented; clients refuse to re-authenticate unless this returns 200.
    return empty_response(200)
