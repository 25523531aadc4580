"""Request parsing shared by the handlers.

Login posts ``application/x-www-form-urlencoded`` bodies; every other
authenticated call carries ``Authorization: Bearer <access token>``.
"""

from __future__ import annotations

import re
from typing import Mapping
from urllib.parse import parse_qsl

from fastapi import Request

from .storage import Storage, User


BEARER_PATTERN = re.compile(r"^Bearer (.+)$")


def bearer_token(headers: Mapping[str, str]) -> str | None:
    match = BEARER_PATTERN.match(headers.get("authorization") or "")
    if match is None:
        return None
    return match.group(1)


def parse_form(query: str, body: bytes) -> dict[str, str]:
    """Merge query string and urlencoded body; the body wins on conflicts.

    Only the first value of a repeated key is kept. Undecodable bodies are
    treated as empty.
    """

    form: dict[str, str] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        form.setdefault(key, value)

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        text = ""
    body_form: dict[str, str] = {}
    for key, value in parse_qsl(text, keep_blank_values=True):
        body_form.setdefault(key, value)

    form.update(body_form)
    return form


async def request_form(request: Request) -> dict[str, str]:
    body = request.scope.get("_body")
    if body is None:
        body = await request.body()
    return parse_form(request.url.query, body)


def get_store(request: Request) -> Storage:
    store: Storage | None = getattr(request.state, "store", None)
    if store is None:
        store = request.app.state.store  # type: ignore[attr-defined]
    return store


def authenticated_user(request: Request) -> User | None:
    token = bearer_token(request.headers)
    if token is None:
        return None
    user, found = get_store(request).get_user_by_access_token(token)
    return user if found else None
