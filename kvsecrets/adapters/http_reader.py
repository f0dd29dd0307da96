"""HTTP SecretReader adapter.

Implements the SecretReader port against the secret store's HTTP API using a
shared requests.Session. Authentication is expected to be done already; the
configured token is only passed along as a header.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import orjson
import requests

from kvsecrets.config.configs import VaultClientConfig
from kvsecrets.errors.errors import HttpStatusError, RemoteCallError
from kvsecrets.ports.secret_reader import SecretReader
from kvsecrets.types.types import SecretResponse

_LOGGER = logging.getLogger(__name__)

TOKEN_HEADER = "X-Vault-Token"
NAMESPACE_HEADER = "X-Vault-Namespace"


class HttpSecretReader(SecretReader):
    def __init__(
        self,
        config: VaultClientConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._cfg = config
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._default_user_agent: str = "kvsecrets/0.1"

    def __enter__(self) -> "HttpSecretReader":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the session if this reader created it."""
        if self._owns_session:
            self._session.close()

    def read(self, path: str) -> Optional[SecretResponse]:
        url = self._cfg.url_for(path)

        try:
            response = self._session.get(
                url,
                headers=self._headers(),
                timeout=self._cfg.timeout,
                verify=self._cfg.verify,
            )
        except requests.RequestException as ex:
            _LOGGER.warning(
                "remote_call_failed",
                extra={"event": "remote_call_failed", "path": path, "error_type": type(ex).__name__},
            )
            raise RemoteCallError(
                f"GET {path} failed: {type(ex).__name__}",
                path=path,
                component="HttpSecretReader",
            ) from ex

        status = response.status_code
        if status == 404:
            _LOGGER.debug("secret_not_found", extra={"event": "secret_not_found", "path": path})
            return None

        if not 200 <= status < 300:
            errors = self._error_messages(response.content)
            _LOGGER.debug(
                "remote_call_failed",
                extra={"event": "remote_call_failed", "path": path, "status_code": status},
            )
            cause = HttpStatusError(
                f"HTTP {status} for GET {path}",
                status_code=status,
                errors=errors,
                component="HttpSecretReader",
            )
            raise RemoteCallError(
                f"GET {path} failed with status {status}",
                path=path,
                status_code=status,
                component="HttpSecretReader",
            ) from cause

        if status == 204 or not response.content:
            return None

        try:
            payload = orjson.loads(response.content)
        except orjson.JSONDecodeError as ex:
            raise RemoteCallError(
                f"GET {path} returned invalid JSON",
                path=path,
                status_code=status,
                component="HttpSecretReader",
            ) from ex

        if not isinstance(payload, dict):
            raise RemoteCallError(
                f"GET {path} returned a non-object body",
                path=path,
                status_code=status,
                component="HttpSecretReader",
            )

        _LOGGER.debug("secret_read", extra={"event": "secret_read", "path": path})
        return SecretResponse.from_payload(payload)

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": self._default_user_agent, "Accept": "application/json"}
        token = self._cfg.token_value()
        if token:
            headers[TOKEN_HEADER] = token
        if self._cfg.namespace:
            headers[NAMESPACE_HEADER] = self._cfg.namespace
        return headers

    @staticmethod
    def _error_messages(content: bytes) -> list[str]:
        # Error bodies look like {"errors": ["permission denied"]}
        if not content:
            return []
        try:
            body = orjson.loads(content)
        except orjson.JSONDecodeError:
            return []
        errors = body.get("errors") if isinstance(body, dict) else None
        return [str(e) for e in errors] if isinstance(errors, list) else []
