"""Opaque token helpers.

Clients never parse the tokens; they only have to be long and unique.
"""

from __future__ import annotations

import base64
import json
import secrets


TOKEN_BYTES = 1500


def generate_token() -> str:
    """Return a fresh URL-safe base64 token.

    Access and refresh tokens are generated the same way.
    """

    return base64.urlsafe_b64encode(secrets.token_bytes(TOKEN_BYTES)).decode("ascii")


def campaign_category_code() -> str:
    """Encoded campaign category claims; clients only check it decodes."""

    content = {"sid": "1234", "ut": 69, "sy": 1}
    raw = json.dumps(content, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")
