"""Route handlers, one module per API area."""

from __future__ import annotations

from fastapi import Request

from ..version_cache import VersionCache


def get_versions(request: Request) -> VersionCache:
    versions: VersionCache | None = getattr(request.state, "versions", None)
    if versions is None:
        versions = request.app.state.versions  # type: ignore[attr-defined]
    return versions
