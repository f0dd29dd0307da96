"""KeyValueSecrets Port Interface.

Contract: Read secrets from key-value mounts regardless of the engine
generation backing the path. Callers always see the flat secret map.
"""

from __future__ import annotations

from typing import Optional, Protocol

from kvsecrets.types.types import MountInfo, SecretResponse


class KeyValueSecrets(Protocol):
    def is_versioned(self, path: str) -> bool: ...

    def fetch_secret(self, path: str) -> Optional[SecretResponse]: ...

    def resolve_mount_info(self, path: str) -> MountInfo: ...

    """
    `resolve_mount_info` is exposed for callers that build other
    version-aware operations on top of the same mount lookup.
    """
