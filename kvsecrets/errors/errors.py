"""
Exceptions for the key-value secrets module.

Exception hierarchy:
- SecretStoreError (base)
  - HttpStatusError: Non-success HTTP status returned by the secret store
  - RemoteCallError: A remote read failed (transport or server side)
  - MountResolutionError: Mount metadata could not be determined
  - ConfigurationError: Invalid client configuration
"""

from __future__ import annotations

from typing import Any, Optional

FORBIDDEN = 403


class SecretStoreError(Exception):
    """Base exception for all secret store errors."""

    def __init__(
        self,
        message: str,
        *,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.component = component
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.component:
            parts.append(f"[component={self.component}]")
        if self.details:
            parts.append(f"[details={self.details}]")
        return " ".join(parts)


class HttpStatusError(SecretStoreError):
    """Raised (usually as a cause) when the store answers with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        errors: Optional[list[str]] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        self.errors = list(errors or [])
        details = details or {}
        details["status_code"] = status_code
        if self.errors:
            details["errors"] = self.errors
        super().__init__(message, component=component, details=details)


class RemoteCallError(SecretStoreError):
    """Raised when a read against the secret store fails."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        status_code: Optional[int] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.path = path
        self.status_code = status_code
        details = details or {}
        if path:
            details["path"] = path
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, component=component, details=details)

    @property
    def status(self) -> Optional[int]:
        """HTTP status of the failure, taken from this error or its cause."""
        if self.status_code is not None:
            return self.status_code
        return status_of(self.__cause__)


class MountResolutionError(SecretStoreError):
    """Raised when mount information for a path cannot be determined."""

    def __init__(
        self,
        message: str,
        *,
        path: str,
        endpoint: str,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.path = path
        self.endpoint = endpoint
        details = details or {}
        details["path"] = path
        details["endpoint"] = endpoint
        super().__init__(message, component=component, details=details)


class ConfigurationError(SecretStoreError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field = field
        self.value = value
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, component=component, details=details)


def status_of(error: Optional[BaseException]) -> Optional[int]:
    """
    Extract an HTTP status from an error object.

    Understands RemoteCallError / HttpStatusError as well as foreign errors that
    expose ``status_code`` directly or through a ``response`` attribute
    (e.g. requests.HTTPError).
    """
    if error is None:
        return None
    if isinstance(error, RemoteCallError):
        return error.status
    status = getattr(error, "status_code", None)
    if isinstance(status, int):
        return status
    response = getattr(error, "response", None)
    status = getattr(response, "status_code", None)
    if isinstance(status, int):
        return status
    return None


def is_forbidden(error: BaseException) -> bool:
    """True if the error (or its cause) signals an authorization denial."""
    if isinstance(error, RemoteCallError):
        return error.status == FORBIDDEN
    return status_of(error.__cause__) == FORBIDDEN
