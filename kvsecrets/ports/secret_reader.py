"""SecretReader Port Interface.

Contract: Read a path from the secret store. Returns the decoded response, or
None if nothing exists at that path. Failures raise RemoteCallError carrying
the HTTP status (directly or via its cause).
"""

from __future__ import annotations

from typing import Optional, Protocol

from kvsecrets.types.types import SecretResponse


class SecretReader(Protocol):
    def read(self, path: str) -> Optional[SecretResponse]: ...
