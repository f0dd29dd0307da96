from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, SecretStr, field_validator

"""
Client configuration for talking to the secret store over HTTP.
"""

DEFAULT_ADDRESS = "http://127.0.0.1:8200"
ENV_PREFIX = "VAULT_"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class VaultClientConfig(BaseModel):
    address: str = DEFAULT_ADDRESS
    token: Optional[SecretStr] = None  # never logged; repr shows '**********'
    namespace: Optional[str] = None
    api_prefix: str = "v1"
    timeout: float = 30.0
    verify: bool = True

    @field_validator("address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("address must start with http:// or https://")
        return value.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _check_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @field_validator("api_prefix")
    @classmethod
    def _check_api_prefix(cls, value: str) -> str:
        value = value.strip("/")
        if not value:
            raise ValueError("api_prefix must be a non-empty string")
        return value

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = ENV_PREFIX,
    ) -> "VaultClientConfig":
        """
        Build a config from environment variables.

        Reads <prefix>ADDR, <prefix>TOKEN, <prefix>NAMESPACE,
        <prefix>CLIENT_TIMEOUT and <prefix>SKIP_VERIFY. Unset variables keep
        their defaults.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        if f"{prefix}ADDR" in env:
            values["address"] = env[f"{prefix}ADDR"]
        if env.get(f"{prefix}TOKEN"):
            values["token"] = env[f"{prefix}TOKEN"]
        if env.get(f"{prefix}NAMESPACE"):
            values["namespace"] = env[f"{prefix}NAMESPACE"]
        if f"{prefix}CLIENT_TIMEOUT" in env:
            values["timeout"] = env[f"{prefix}CLIENT_TIMEOUT"]
        if f"{prefix}SKIP_VERIFY" in env:
            values["verify"] = env[f"{prefix}SKIP_VERIFY"].strip().lower() not in _TRUTHY

        return cls(**values)

    def token_value(self) -> Optional[str]:
        return self.token.get_secret_value() if self.token is not None else None

    def url_for(self, path: str) -> str:
        return f"{self.address}/{self.api_prefix}/{path.lstrip('/')}"
