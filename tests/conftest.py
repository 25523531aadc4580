import sys
import threading
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bakalari_mock.directory import City, CityDetails, School, SchoolInfo  # noqa: E402
from bakalari_mock.errors import DirectoryError  # noqa: E402
from bakalari_mock.storage import MemoryStorage  # noqa: E402
from bakalari_mock.version_cache import VersionCache  # noqa: E402


class FakeDirectory:
    """In-memory stand-in for DirectoryClient that counts every fetch."""

    def __init__(
        self,
        cities: dict[str, list[School]] | None = None,
        versions: dict[str, tuple[str, str]] | None = None,
        *,
        school_counts: dict[str, int] | None = None,
    ) -> None:
        self.cities = cities or {}
        self.versions = versions or {}
        self.school_counts = school_counts or {}
        self.fail_cities = False
        self.failing_schools: set[str] = set()
        self.calls = {"list_cities": 0, "get_city": 0, "get_school_info": 0}
        self._lock = threading.Lock()

    def _count(self, name: str) -> None:
        with self._lock:
            self.calls[name] += 1

    def list_cities(self) -> list[City]:
        self._count("list_cities")
        if self.fail_cities:
            raise DirectoryError("https://directory.test/api/v1/municipality", "boom")
        return [
            City(name=name, school_count=self.school_counts.get(name, len(schools)))
            for name, schools in self.cities.items()
        ]

    def get_city(self, name: str) -> CityDetails:
        self._count("get_city")
        return CityDetails(name=name, schools=list(self.cities[name]))

    def get_school_info(self, school_url: str) -> SchoolInfo:
        self._count("get_school_info")
        if school_url in self.failing_schools:
            raise DirectoryError(school_url + "/api/3", "unreachable")
        api, app = self.versions[school_url]
        return SchoolInfo(api_version=api, app_version=app, base_url="api/3")


class RecordingSpawn:
    """Collects refresh callables instead of starting threads."""

    def __init__(self) -> None:
        self.spawned: list[Callable[[], None]] = []
        self._lock = threading.Lock()

    def __call__(self, target: Callable[[], None]) -> None:
        with self._lock:
            self.spawned.append(target)

    def run_all(self) -> None:
        while self.spawned:
            self.spawned.pop(0)()


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def school(url: str) -> School:
    return School(id=url.rsplit("/", 1)[-1], name=url, school_url=url)


@pytest.fixture
def spawn():
    return RecordingSpawn()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def directory():
    return FakeDirectory(
        cities={"Praha": [school("https://praha.test/")]},
        versions={"https://praha.test": ("3.30.0", "1.60.0.0")},
    )


@pytest.fixture
def cache(directory, spawn, clock):
    return VersionCache(directory, spawn=spawn, clock=clock)


@pytest.fixture
def store():
    return MemoryStorage()
