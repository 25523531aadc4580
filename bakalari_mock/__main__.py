"""Module entrypoint for the mock server.

Starts the FastAPI app under uvicorn on ``APP_ADDRESS`` (default ``:8080``).
See ``settings.py`` for the other environment knobs.
"""

from __future__ import annotations

import logging
import sys

import uvicorn

from .settings import load_settings


def main() -> None:
    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"[mock] {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("bakalari_mock").info("Listening on: %s:%d", settings.host, settings.port)

    uvicorn.run(
        "bakalari_mock.server:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        proxy_headers=settings.proxy_headers,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
