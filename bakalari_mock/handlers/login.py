"""Authentication.

Implements:
- POST /api/login (grant_type=password | refresh_token)

Any username/password pair is accepted. The password is stored as the user's
class name so testers can tell accounts apart in the client UI.

https://github.com/bakalari-api/bakalari-api-v3/blob/master/login.md
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import Response

from ..auth import get_store, request_form
from ..errors import UserAlreadyExists
from ..responses import empty_response, json_response, login_payload
from ..storage import Storage, User
from . import get_versions


log = logging.getLogger("bakalari_mock.handlers.login")

MAX_FIELD_LENGTH = 256


def _valid_field(form: dict[str, str], key: str) -> bool:
    return key in form and len(form[key]) < MAX_FIELD_LENGTH


def login_with_password(store: Storage, name: str, class_name: str) -> User:
    """Return the user for ``name``, creating it on first login.

    Repeat logins only overwrite the class name; tokens are kept.
    """

    user, found = store.get_user_by_name(name)
    if found and user is not None:
        user.class_name = class_name
        return user

    user = User(name=name, class_name=class_name)
    try:
        store.add_user(user)
        log.info("Created mock user %r", name)
        return user
    except UserAlreadyExists:
        # A concurrent login created it first.
        existing, found = store.get_user_by_name(name)
        if not found or existing is None:
            raise
        existing.class_name = class_name
        return existing


async def post_login(request: Request) -> Response:
    form = await request_form(request)
    store = get_store(request)

    grant_type = form.get("grant_type")
    if grant_type == "password":
        if not _valid_field(form, "username") or not _valid_field(form, "password"):
            return empty_response(400)
        user = login_with_password(store, form["username"], form["password"])

    elif grant_type == "refresh_token":
        if "refresh_token" not in form:
            return empty_response(400)
        found_user, found = store.get_user_by_refresh_token(form["refresh_token"])
        if not found or found_user is None:
            return empty_response(400)
        user = found_user

    else:
        return empty_response(400)

    api_version, app_version = get_versions(request).read()
    return json_response(
        login_payload(
            api_version=api_version,
            app_version=app_version,
            refresh_token=user.refresh_token,
            access_token=user.access_token,
        )
    )
