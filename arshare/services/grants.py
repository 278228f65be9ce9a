"""Per-device access grants.

A grant is the canonical access code a device already unlocked a share
with, stored under ``ar_access_<share_link_id>``. The gate only ever talks to
the small ``get``/``set``/``delete`` interface below, so the backing store is
chosen by the caller.
"""
from typing import Protocol

GRANT_PREFIX = 'ar_access_'


def grant_key(share_link_id: str) -> str:
    return f"{GRANT_PREFIX}{share_link_id}"


class GrantStore(Protocol):
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...


class MemoryGrantStore:
    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = []

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.writes.append((key, value))
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)


class SessionGrantStore:
    """Grants kept in the signed Flask session cookie of the visiting browser."""

    def __init__(self, session):
        self.session = session

    def get(self, key):
        return self.session.get(key)

    def set(self, key, value):
        self.session.permanent = True
        self.session[key] = value

    def delete(self, key):
        self.session.pop(key, None)


class DeviceGrantStore:
    """Grants kept in a shared backend (Redis or the memory fallback), scoped by device id."""

    def __init__(self, backend, device_id: str):
        self.backend = backend
        self.prefix = f"dev:{device_id}:"

    def get(self, key):
        return self.backend.get(self.prefix + key)

    def set(self, key, value):
        self.backend.set(self.prefix + key, value)

    def delete(self, key):
        self.backend.delete(self.prefix + key)
