"""
Key-Value Secrets Module.

Reads secrets from key-value mounts of either engine generation behind one
interface. Mount metadata is looked up once per path through
`sys/internal/ui/mounts` and cached; versioned mounts get their read path
rewritten to `<mount>data/<key>` and their response envelope unwrapped.

Components:
- MountResolver: Mount metadata lookup and per-path cache
- KeyValueDelegate: Version-aware reads on top of a SecretReader

Usage:
    from kvsecrets.adapters.http_reader import HttpSecretReader
    from kvsecrets.config.configs import VaultClientConfig
    from kvsecrets.kv import KeyValueDelegate

    reader = HttpSecretReader(VaultClientConfig.from_env())
    kv = KeyValueDelegate(reader)
    response = kv.fetch_secret("secret/myapp/config")
"""

from kvsecrets.errors.errors import (
    MountResolutionError,
    RemoteCallError,
    SecretStoreError,
)
from kvsecrets.kv.delegate import KeyValueDelegate, kv2_data_path, unwrap_data_response
from kvsecrets.kv.mounts import MOUNTS_ENDPOINT, MountResolver
from kvsecrets.types.types import KeyValueBackend, MountInfo, SecretResponse

__all__ = [
    # Main entry points
    "KeyValueDelegate",
    "MountResolver",
    # Types
    "KeyValueBackend",
    "MountInfo",
    "SecretResponse",
    # Helpers
    "MOUNTS_ENDPOINT",
    "kv2_data_path",
    "unwrap_data_response",
    # Errors
    "SecretStoreError",
    "RemoteCallError",
    "MountResolutionError",
]
