"""Client for the public directory of Bakaláři instances.

The directory lists municipalities ("cities"), each with its schools, and every
school runs its own API instance that reports the deployed versions.

Every failure (transport, non-2xx status, malformed JSON, missing fields) is
raised as DirectoryError so callers only have one thing to catch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from .errors import DirectoryError


log = logging.getLogger("bakalari_mock.directory")

DIRECTORY_URL = "https://sluzby.bakalari.cz"
CITIES_PATH = "/api/v1/municipality"
SCHOOL_INFO_PATH = "/api/3"

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)


@dataclass(frozen=True, slots=True)
class City:
    name: str
    school_count: int


@dataclass(frozen=True, slots=True)
class School:
    id: str
    name: str
    school_url: str


@dataclass(frozen=True, slots=True)
class CityDetails:
    name: str
    schools: list[School]


@dataclass(frozen=True, slots=True)
class SchoolInfo:
    api_version: str
    app_version: str
    base_url: str


def normalize_school_url(url: str) -> str:
    return url.rstrip("/")


def _require(obj: Any, key: str, kind: type, url: str) -> Any:
    if not isinstance(obj, dict):
        raise DirectoryError(url, f"expected an object, got {type(obj).__name__}")
    value = obj.get(key)
    if not isinstance(value, kind):
        raise DirectoryError(url, f"field {key!r} is missing or not a {kind.__name__}")
    return value


class DirectoryClient:
    """Typed access to the directory and to individual school instances."""

    def __init__(
        self,
        base_url: str = DIRECTORY_URL,
        *,
        client: httpx.Client | None = None,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def get_json(self, instance: str, endpoint: str) -> Any:
        """GET ``instance + endpoint`` and decode the JSON body."""

        url = instance + endpoint
        headers = {"content-type": JSON_CONTENT_TYPE, "accept": JSON_CONTENT_TYPE}
        try:
            response = self._client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DirectoryError(url, str(exc) or type(exc).__name__) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise DirectoryError(url, f"invalid JSON: {exc}") from exc

    def list_cities(self) -> list[City]:
        url = self.base_url + CITIES_PATH
        data = self.get_json(self.base_url, CITIES_PATH)
        if not isinstance(data, list):
            raise DirectoryError(url, "expected a list of cities")
        return [
            City(
                name=_require(item, "name", str, url),
                school_count=_require(item, "schoolCount", int, url),
            )
            for item in data
        ]

    def get_city(self, name: str) -> CityDetails:
        endpoint = f"{CITIES_PATH}/{quote(name, safe='')}"
        url = self.base_url + endpoint
        data = self.get_json(self.base_url, endpoint)
        schools = data.get("schools") if isinstance(data, dict) else None
        if not isinstance(schools, list):
            # The directory sends null for cities without schools.
            schools = []
        return CityDetails(
            name=_require(data, "name", str, url),
            schools=[
                School(
                    id=str(item.get("id", "")) if isinstance(item, dict) else "",
                    name=str(item.get("name", "")) if isinstance(item, dict) else "",
                    school_url=_require(item, "schoolUrl", str, url),
                )
                for item in schools
            ],
        )

    def get_school_info(self, school_url: str) -> SchoolInfo:
        instance = normalize_school_url(school_url)
        url = instance + SCHOOL_INFO_PATH
        data = self.get_json(instance, SCHOOL_INFO_PATH)
        info = SchoolInfo(
            api_version=_require(data, "ApiVersion", str, url),
            app_version=_require(data, "ApplicationVersion", str, url),
            base_url=str(data.get("BaseUrl") or ""),
        )
        log.debug("School %s reports api=%s app=%s", instance, info.api_version, info.app_version)
        return info
