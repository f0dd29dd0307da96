"""
Purpose:
    - Loads a config file (TOML)
    - Builds a validated VaultClientConfig from its [vault] table
"""

import tomllib
from pathlib import Path
from typing import Any

from kvsecrets.config.configs import VaultClientConfig
from kvsecrets.errors.errors import ConfigurationError

VAULT_SECTION = "vault"


class ConfigLoader:
    """
    Config-loader; loading toml file.
    """

    def __init__(self, base_dir: str = ".") -> None:
        self._base_dir = base_dir

    def load(self, file_name: str) -> dict[str, Any]:
        path = Path(file_name)
        if not path.is_absolute():
            path = Path(self._base_dir) / file_name

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with path.open("rb") as f:
            return tomllib.load(f)

    def load_client_config(self, file_name: str) -> VaultClientConfig:
        data = self.load(file_name)
        section = data.get(VAULT_SECTION, {})
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"[{VAULT_SECTION}] must be a table",
                field=VAULT_SECTION,
                component="ConfigLoader",
            )

        unknown = sorted(set(section) - set(VaultClientConfig.model_fields))
        if unknown:
            raise ConfigurationError(
                f"Unknown keys in [{VAULT_SECTION}]: {', '.join(unknown)}",
                field=unknown[0],
                component="ConfigLoader",
            )

        return VaultClientConfig(**section)
