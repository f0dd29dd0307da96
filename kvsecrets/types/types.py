"""
define canonical types
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional

from kvsecrets.errors.errors import SecretStoreError

# -------- Aliases (clarify intent) --------
MountPath = str  # always ends with "/", e.g. "secret/"

# -------- Enums --------


class KeyValueBackend(str, Enum):
    """Key-value engine generations, valued by the `version` mount option."""

    KV_1 = "1"
    KV_2 = "2"

    @classmethod
    def unversioned(cls) -> "KeyValueBackend":
        return cls.KV_1

    @classmethod
    def versioned(cls) -> "KeyValueBackend":
        return cls.KV_2


# -------- Mount metadata --------


@dataclass(frozen=True)
class MountInfo:
    """
    Mount metadata for a secret path as reported by `sys/internal/ui/mounts`.

    Use `MountInfo.unavailable()` instead of None when the mount cannot be
    determined; it is a shared instance and compares equal to any other
    unavailable value.
    """

    path: MountPath
    options: Optional[Mapping[str, Any]] = None
    available: bool = False

    UNAVAILABLE: ClassVar["MountInfo"]

    @classmethod
    def unavailable(cls) -> "MountInfo":
        return cls.UNAVAILABLE

    @classmethod
    def from_mount(cls, path: MountPath, options: Optional[Mapping[str, Any]]) -> "MountInfo":
        frozen_options = MappingProxyType(dict(options)) if options is not None else None
        return cls(path=path, options=frozen_options, available=True)

    @property
    def version(self) -> Optional[str]:
        if self.options is None:
            return None
        value = self.options.get("version")
        return None if value is None else str(value)

    def is_key_value(self, backend: KeyValueBackend) -> bool:
        """Check whether this mount is a key-value engine of the given generation."""
        if not self.available or not self.path or self.options is None:
            return False
        return self.version == backend.value


MountInfo.UNAVAILABLE = MountInfo(path="", options=None, available=False)


# -------- Responses --------


@dataclass
class SecretResponse:
    """
    Decoded response envelope of a read.

    `data` is the structured payload; key-value v2 reads nest the secret under
    `data["data"]` and version metadata under `data["metadata"]`.
    """

    data: Optional[dict[str, Any]] = None
    request_id: Optional[str] = None
    lease_id: Optional[str] = None
    renewable: bool = False
    lease_duration: int = 0
    wrap_info: Optional[dict[str, Any]] = None
    warnings: Optional[list[str]] = None
    auth: Optional[dict[str, Any]] = None
    metadata: Optional[dict[str, Any]] = None
    extra: dict[str, Any] = field(default_factory=dict)

    _KNOWN_KEYS: ClassVar[frozenset[str]] = frozenset(
        {
            "data",
            "request_id",
            "lease_id",
            "renewable",
            "lease_duration",
            "wrap_info",
            "warnings",
            "auth",
            "metadata",
        }
    )

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SecretResponse":
        data = payload.get("data")
        return cls(
            data=dict(data) if isinstance(data, Mapping) else None,
            request_id=payload.get("request_id"),
            lease_id=payload.get("lease_id"),
            renewable=bool(payload.get("renewable", False)),
            lease_duration=int(payload.get("lease_duration") or 0),
            wrap_info=payload.get("wrap_info"),
            warnings=payload.get("warnings"),
            auth=payload.get("auth"),
            metadata=payload.get("metadata"),
            extra={k: v for k, v in payload.items() if k not in cls._KNOWN_KEYS},
        )

    def required_data(self) -> dict[str, Any]:
        if self.data is None:
            raise SecretStoreError("Response has no data", component="SecretResponse")
        return self.data
