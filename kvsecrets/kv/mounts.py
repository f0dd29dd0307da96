"""
Mount resolution for key-value secret paths.

Uses the internal `sys/internal/ui/mounts/<path>` endpoint to find out which
mount owns a path and which engine options (notably `version`) it advertises.
Successful lookups are cached per requested path for the lifetime of the
resolver; failures and empty answers are never cached.
"""

from __future__ import annotations

import logging
import threading
from typing import MutableMapping, Optional

from kvsecrets.errors.errors import MountResolutionError, is_forbidden
from kvsecrets.ports.secret_reader import SecretReader
from kvsecrets.types.types import KeyValueBackend, MountInfo

_LOGGER = logging.getLogger(__name__)

MOUNTS_ENDPOINT = "sys/internal/ui/mounts"


class MountResolver:
    """
    Resolve and cache MountInfo per secret path.

    Safe for concurrent use. Two threads resolving the same uncached path may
    both hit the endpoint; the first value stored is kept and returned to both.
    """

    def __init__(
        self,
        reader: SecretReader,
        cache: Optional[MutableMapping[str, MountInfo]] = None,
    ) -> None:
        self._reader = reader
        self._cache: MutableMapping[str, MountInfo] = {} if cache is None else cache
        self._lock = threading.Lock()

    def is_versioned(self, path: str) -> bool:
        """True if `path` belongs to a versioned (v2) key-value mount."""
        return self.resolve_mount_info(path).is_key_value(KeyValueBackend.versioned())

    def resolve_mount_info(self, path: str) -> MountInfo:
        cached = self.cached(path)
        if cached is not None:
            return cached

        try:
            mount_info = self._lookup(path)
        except Exception as exc:
            if is_forbidden(exc):
                _LOGGER.debug(
                    "mount_info_forbidden",
                    extra={
                        "event": "mount_info_forbidden",
                        "path": path,
                        "endpoint": MOUNTS_ENDPOINT,
                        "error": str(exc),
                    },
                    exc_info=True,
                )
                return MountInfo.unavailable()

            _LOGGER.warning(
                "mount_resolution_failed",
                extra={
                    "event": "mount_resolution_failed",
                    "path": path,
                    "endpoint": MOUNTS_ENDPOINT,
                    "error_type": type(exc).__name__,
                },
            )
            raise MountResolutionError(
                f"Cannot determine MountInfo for path '{path}' using '{MOUNTS_ENDPOINT}'",
                path=path,
                endpoint=MOUNTS_ENDPOINT,
                component="MountResolver",
            ) from exc

        if not mount_info.available:
            _LOGGER.debug(
                "mount_info_unavailable",
                extra={"event": "mount_info_unavailable", "path": path},
            )
            return mount_info

        with self._lock:
            stored = self._cache.setdefault(path, mount_info)

        _LOGGER.debug(
            "mount_info_cached",
            extra={
                "event": "mount_info_cached",
                "path": path,
                "mount_path": stored.path,
                "version": stored.version,
            },
        )
        return stored

    def cached(self, path: str) -> Optional[MountInfo]:
        """Return the cached MountInfo for `path` without any remote call."""
        with self._lock:
            return self._cache.get(path)

    def evict(self, path: str) -> None:
        with self._lock:
            self._cache.pop(path, None)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def _lookup(self, path: str) -> MountInfo:
        response = self._reader.read(f"{MOUNTS_ENDPOINT}/{path}")

        if response is None or response.data is None:
            return MountInfo.unavailable()

        data = response.data
        return MountInfo.from_mount(data.get("path") or "", data.get("options"))
