"""Registry of the Bakaláři endpoints the mock answers.

Anything not listed here falls through to the catch-all in ``server.py``.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.responses import Response

from .handlers.info import get_info
from .handlers.login import post_login
from .handlers.user import get_user, register_notification
from .handlers.web import donate_redirect, get_login_token, get_webmodule


log = logging.getLogger("bakalari_mock.routes")

Handler = Callable[[Request], Awaitable[Response]]

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

# Each item: {'path': str, 'methods': [str], 'handler': Handler}
KNOWN_ROUTES: list[dict[str, Any]] = [
    {"path": "/api/3", "methods": ["GET"], "handler": get_info},
    {"path": "/api/login", "methods": ["POST"], "handler": post_login},
    {"path": "/api/3/user", "methods": ["GET"], "handler": get_user},
    # Body and method are not checked by the client.
    {"path": "/api/3/register-notification", "methods": ALL_METHODS, "handler": register_notification},
    {"path": "/api/3/webmodule", "methods": ["GET"], "handler": get_webmodule},
    {"path": "/api/3/logintoken", "methods": ALL_METHODS, "handler": get_login_token},
    {"path": "/api/3/login/donate", "methods": ALL_METHODS, "handler": donate_redirect},
]


def register_known_routes(app: FastAPI) -> None:
    for item in KNOWN_ROUTES:
        handler: Handler = item["handler"]
        app.add_route(item["path"], handler, methods=item["methods"])
    log.debug("Registered %d known routes", len(KNOWN_ROUTES))
