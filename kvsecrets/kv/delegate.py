"""
Version-aware reads for key-value secret mounts.

Versioned (v2) mounts serve secrets at `<mount>data/<key>` and wrap them in an
envelope: `{"data": {...secret...}, "metadata": {...}}`. Unversioned (v1)
mounts serve the secret map directly at `<mount><key>`. KeyValueDelegate hides
the difference so callers always get the flat secret map back.
"""

from __future__ import annotations

import logging
from typing import MutableMapping, Optional

from kvsecrets.kv.mounts import MountResolver
from kvsecrets.ports.secret_reader import SecretReader
from kvsecrets.types.types import KeyValueBackend, MountInfo, SecretResponse

_LOGGER = logging.getLogger(__name__)


def kv2_data_path(mount_path: str, requested_path: str) -> str:
    """
    Rewrite a requested secret path to its versioned read path.

    >>> kv2_data_path("secret/", "secret/myapp/config")
    'secret/data/myapp/config'

    Paths outside `mount_path` are returned unchanged.
    """
    if not requested_path.startswith(mount_path):
        return requested_path

    key_path = requested_path[len(mount_path) :]
    return f"{mount_path}data/{key_path}"


def unwrap_data_response(response: Optional[SecretResponse]) -> None:
    """Replace a v2 envelope's payload with its nested `data` map, in place."""
    if response is None or response.data is None or "data" not in response.data:
        return

    nested = response.data["data"]
    response.data = dict(nested) if nested is not None else None


class KeyValueDelegate:
    """
    Read secrets from key-value mounts of either engine generation.

    Mount lookups go through a MountResolver; pass `resolver` to share one
    cache between several delegates, or `cache` to supply the mapping used by
    a newly created resolver.
    """

    def __init__(
        self,
        reader: SecretReader,
        cache: Optional[MutableMapping[str, MountInfo]] = None,
        resolver: Optional[MountResolver] = None,
    ) -> None:
        self._reader = reader
        self._resolver = resolver if resolver is not None else MountResolver(reader, cache)

    @property
    def resolver(self) -> MountResolver:
        return self._resolver

    def is_versioned(self, path: str) -> bool:
        return self._resolver.is_versioned(path)

    def resolve_mount_info(self, path: str) -> MountInfo:
        return self._resolver.resolve_mount_info(path)

    def fetch_secret(self, path: str) -> Optional[SecretResponse]:
        """
        Read the secret at `path`.

        Returns None if nothing exists at the path. Mount resolution failures
        propagate; no fallback read is attempted in that case.
        """
        mount_info = self._resolver.resolve_mount_info(path)

        if not mount_info.is_key_value(KeyValueBackend.versioned()):
            _LOGGER.debug(
                "kv1_read",
                extra={"event": "kv1_read", "path": path, "available": mount_info.available},
            )
            return self._reader.read(path)

        read_path = kv2_data_path(mount_info.path, path)
        _LOGGER.debug(
            "kv2_read",
            extra={"event": "kv2_read", "path": path, "read_path": read_path},
        )

        response = self._reader.read(read_path)
        unwrap_data_response(response)
        return response
