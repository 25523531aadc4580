"""Error taxonomy for the mock server.

Upstream failures never reach a client: the version refresh swallows them
after logging. Store conflicts are returned to the caller, which decides what
to do with them.
"""

from __future__ import annotations

from typing import Any


class MockError(Exception):
    """Base class for errors raised by the mock itself."""


class UserAlreadyExists(MockError):
    def __init__(self, name: str) -> None:
        super().__init__(f"User {name!r} already exists")
        self.name = name


class DirectoryError(MockError):
    """A directory or school endpoint could not be fetched or decoded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


def error_from_exception(exc: BaseException) -> dict[str, Any]:
    """Best-effort conversion of unexpected exceptions into log details."""

    details: dict[str, Any] = {"type": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, DirectoryError):
        details["url"] = exc.url
    return details
