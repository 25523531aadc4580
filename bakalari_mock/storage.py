"""In-memory user/session storage.

Users are keyed by name. Each user owns one refresh token and one access
token, both issued at creation and never rotated. Nothing survives a restart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import RLock
from typing import Protocol

from .errors import UserAlreadyExists
from .tokens import generate_token


@dataclass(slots=True)
class User:
    name: str
    # Display-only; the login "password" ends up here.
    class_name: str
    refresh_token: str = field(default_factory=generate_token)
    access_token: str = field(default_factory=generate_token)


class Storage(Protocol):
    def add_user(self, user: User) -> None: ...

    def get_user_by_name(self, name: str) -> tuple[User | None, bool]: ...

    def get_user_by_refresh_token(self, refresh_token: str) -> tuple[User | None, bool]: ...

    def get_user_by_access_token(self, access_token: str) -> tuple[User | None, bool]: ...


class MemoryStorage:
    """Thread-safe in-memory store.

    Token indices map a token to the owning user's name and are updated in
    the same critical section as the primary insert.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._users: dict[str, User] = {}
        self._by_refresh: dict[str, str] = {}
        self._by_access: dict[str, str] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def add_user(self, user: User) -> None:
        with self._lock:
            if user.name in self._users:
                raise UserAlreadyExists(user.name)
            self._users[user.name] = user
            self._by_refresh[user.refresh_token] = user.name
            self._by_access[user.access_token] = user.name

    def get_user_by_name(self, name: str) -> tuple[User | None, bool]:
        with self._lock:
            user = self._users.get(name)
            return user, user is not None

    def get_user_by_refresh_token(self, refresh_token: str) -> tuple[User | None, bool]:
        with self._lock:
            return self._lookup(self._by_refresh, refresh_token)

    def get_user_by_access_token(self, access_token: str) -> tuple[User | None, bool]:
        with self._lock:
            return self._lookup(self._by_access, access_token)

    def _lookup(self, index: dict[str, str], token: str) -> tuple[User | None, bool]:
        name = index.get(token)
        if name is None:
            return None, False
        user = self._users.get(name)
        return user, user is not None

