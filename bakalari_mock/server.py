"""HTTP server and catch-all routing for the mock.

- Known Bakaláři endpoints are registered from ``routes.KNOWN_ROUTES``.
- Unknown paths are logged and answered with an empty 400, like the real
  server does for garbage.
- Unexpected exceptions never leak a traceback or a half-written body; the
  guard answers with an empty 500.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import HTMLResponse
from starlette.middleware.cors import CORSMiddleware

from . import __version__
from .directory import DirectoryClient
from .errors import error_from_exception
from .pages import HOME_HTML
from .responses import empty_response
from .routes import ALL_METHODS, register_known_routes
from .storage import MemoryStorage, Storage
from .version_cache import VersionCache


log = logging.getLogger("bakalari_mock.server")


def create_app(
    *,
    store: Storage | None = None,
    versions: VersionCache | None = None,
) -> FastAPI:
    directory: DirectoryClient | None = None
    if versions is None:
        directory = DirectoryClient()
        versions = VersionCache(directory)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # First refresh starts with the process; reads during it see the seed pair.
        app.state.versions.start()  # type: ignore[attr-defined]
        try:
            yield
        finally:
            if directory is not None:
                directory.close()

    app = FastAPI(
        title="Dummy Bakaláři",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.state.store = store if store is not None else MemoryStorage()  # type: ignore[attr-defined]
    app.state.versions = versions  # type: ignore[attr-defined]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _exception_guard(request: Request, call_next):
        """Ensure unexpected exceptions never escape as framework 500s."""

        request.state.store = app.state.store  # type: ignore[attr-defined]
        request.state.versions = app.state.versions  # type: ignore[attr-defined]
        # Read the body once so handlers can parse it without another await.
        try:
            request.scope["_body"] = await request.body()
        except Exception:  # noqa: BLE001
            request.scope["_body"] = b""
        try:
            response: Response = await call_next(request)
            return response
        except Exception as exc:  # noqa: BLE001
            log.error(
                "Request %s %s failed: %s",
                request.method,
                request.url.path,
                error_from_exception(exc),
                exc_info=exc,
            )
            return empty_response(500)

    @app.get("/", response_class=HTMLResponse)
    async def home():
        return HTMLResponse(HOME_HTML)

    register_known_routes(app)

    @app.api_route("/{full_path:path}", methods=ALL_METHODS)
    async def catch_all(full_path: str, request: Request):
        log.info("Unhandled path: %s", request.url)
        return empty_response(400)

    return app


app = create_app()
