"""Majority-vote cache of the Bakaláři version most real schools run.

Clients refuse to talk to a server whose version looks outdated, so the mock
reports whatever most real instances report. Asking every school on each
request is far too slow; instead a background refresh samples a handful of
schools at most once per hour and the request path only ever reads the last
result.

Refresh rounds:
  1. list all cities from the directory
  2. pick a random city, then a random school in it, and ask that school for
     its versions; failed or empty picks are retried and not counted
  3. after SAMPLE_COUNT samples keep the most common api and app version
     (independently; ties go to the lexicographically smallest string)

Only the flag check-and-set and the final commit hold the lock. The network
part runs unlocked in its own thread.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from collections import Counter
from typing import Callable, Iterable, Protocol

from .directory import City, CityDetails, SchoolInfo, normalize_school_url
from .errors import DirectoryError, error_from_exception


log = logging.getLogger("bakalari_mock.version_cache")

DEFAULT_API_VERSION = "3.23.0"
DEFAULT_APP_VERSION = "1.52.1102.1"

FRESHNESS_WINDOW = 60 * 60  # seconds
SAMPLE_COUNT = 10
MAX_ATTEMPTS = SAMPLE_COUNT * 10


class Directory(Protocol):
    def list_cities(self) -> list[City]: ...

    def get_city(self, name: str) -> CityDetails: ...

    def get_school_info(self, school_url: str) -> SchoolInfo: ...


class Chooser(Protocol):
    def choice(self, seq): ...


def spawn_thread(target: Callable[[], None]) -> None:
    threading.Thread(target=target, name="version-refresh", daemon=True).start()


def most_common(values: Iterable[str]) -> str | None:
    """Most frequent value; ties resolve to the smallest string."""

    counts = Counter(values)
    if not counts:
        return None
    best = max(counts.values())
    return min(value for value, count in counts.items() if count == best)


class VersionCache:
    """Process-wide ``(api_version, app_version)`` pair."""

    def __init__(
        self,
        directory: Directory,
        *,
        api_version: str = DEFAULT_API_VERSION,
        app_version: str = DEFAULT_APP_VERSION,
        rng: Chooser | None = None,
        clock: Callable[[], float] = time.monotonic,
        spawn: Callable[[Callable[[], None]], None] = spawn_thread,
    ) -> None:
        self._directory = directory
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock
        self._spawn = spawn

        self._lock = threading.Lock()
        self._api_version = api_version
        self._app_version = app_version
        self._fetched_at: float | None = None
        self._refreshing = False

    def start(self) -> None:
        """Kick off the first refresh at process start.

        The flag is raised before the refresh is spawned, so reads racing with
        startup never schedule a second one.
        """

        with self._lock:
            if self._refreshing:
                return
            self._refreshing = True
        self._spawn(self._refresh)

    def read(self) -> tuple[str, str]:
        """Return the cached pair immediately.

        Schedules a background refresh when the pair is stale and none is
        running; never waits for it.
        """

        with self._lock:
            trigger = not self._refreshing and self._is_stale()
            if trigger:
                self._refreshing = True
            current = (self._api_version, self._app_version)

        if trigger:
            try:
                self._spawn(self._refresh)
            except Exception as exc:  # noqa: BLE001
                log.error("Could not start version refresh: %s", error_from_exception(exc))
                with self._lock:
                    self._refreshing = False
        return current

    def _is_stale(self) -> bool:
        if self._fetched_at is None:
            return True
        return self._clock() - self._fetched_at > FRESHNESS_WINDOW

    def _refresh(self) -> None:
        log.info("Running Bakaláři version update.")
        result: tuple[str, str] | None = None
        try:
            result = self._compute()
        except Exception as exc:  # noqa: BLE001
            log.exception("Updating Bakaláři version crashed: %s", error_from_exception(exc))
        finally:
            with self._lock:
                if result is not None:
                    self._api_version, self._app_version = result
                    self._fetched_at = self._clock()
                self._refreshing = False

        if result is not None:
            log.info("Finished Bakaláři version update: api=%s app=%s", *result)

    def _compute(self) -> tuple[str, str] | None:
        try:
            cities = self._directory.list_cities()
        except DirectoryError as exc:
            log.warning("Updating Bakaláři version failed: %s", exc)
            return None
        if not cities:
            log.warning("Updating Bakaláři version failed: directory listed no cities")
            return None

        samples = self._sample(cities)
        if not samples:
            log.warning("Updating Bakaláři version failed: no school answered")
            return None
        if len(samples) < SAMPLE_COUNT:
            log.warning("Version update gave up after %d attempts with %d samples", MAX_ATTEMPTS, len(samples))

        api_version = most_common(info.api_version for info in samples)
        app_version = most_common(info.app_version for info in samples)
        assert api_version is not None and app_version is not None
        return api_version, app_version

    def _sample(self, cities: list[City]) -> list[SchoolInfo]:
        samples: list[SchoolInfo] = []
        attempts = 0
        while len(samples) < SAMPLE_COUNT and attempts < MAX_ATTEMPTS:
            attempts += 1
            city = self._rng.choice(cities)
            if city.school_count <= 0:
                continue

            try:
                details = self._directory.get_city(city.name)
            except DirectoryError as exc:
                log.debug("City %r could not be fetched: %s", city.name, exc)
                continue
            if not details.schools:
                continue

            school = self._rng.choice(details.schools)
            school_url = normalize_school_url(school.school_url)
            try:
                samples.append(self._directory.get_school_info(school_url))
            except DirectoryError as exc:
                log.info("Failed to fetch API version from %r: %s", school_url, exc)
        return samples
