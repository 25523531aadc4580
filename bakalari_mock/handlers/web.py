"""Web module and web login.

Implements:
- GET /api/3/webmodule
- /api/3/logintoken
- /api/3/login/donate

The client builds its web login URL as ``/api/3/login/<login token>``; the
mock hands out ``donate`` so that link lands on the redirect below.

https://github.com/bakalari-api/bakalari-api-v3/blob/master/moduly/web.md
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import RedirectResponse, Response

from ..responses import json_response, webmodule_payload


LOGIN_TOKEN = "donate"
DONATE_URL = "https://www.buymeacoffee.com/vfosnar"


async def get_webmodule(request: Request) -> Response:
    return json_response(webmodule_payload())


async def get_login_token(request: Request) -> Response:
    return json_response(LOGIN_TOKEN)


async def donate_redirect(request: Request) -> Response:
    return RedirectResponse(DONATE_URL, status_code=307)
