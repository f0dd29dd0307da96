from __future__ import annotations

from typing import Any, Optional, Union

import pytest

from kvsecrets.types.types import SecretResponse

Answer = Union[SecretResponse, None, BaseException]


class FakeReader:
    """
    In-memory SecretReader.

    Paths map to a SecretResponse, None, or an exception instance to raise.
    Every call is recorded in `calls`.
    """

    def __init__(self, answers: Optional[dict[str, Answer]] = None) -> None:
        self.answers: dict[str, Answer] = dict(answers or {})
        self.calls: list[str] = []

    def read(self, path: str) -> Optional[SecretResponse]:
        self.calls.append(path)
        answer = self.answers.get(path)
        if isinstance(answer, BaseException):
            raise answer
        return answer

    def count(self, path: str) -> int:
        return self.calls.count(path)


def mount_response(path: str, options: Optional[dict[str, Any]] = None) -> SecretResponse:
    data: dict[str, Any] = {"path": path, "type": "kv"}
    if options is not None:
        data["options"] = options
    return SecretResponse(data=data)


@pytest.fixture
def reader() -> FakeReader:
    return FakeReader()


@pytest.fixture
def kv2_reader() -> FakeReader:
    """Reader backed by a versioned mount at `secret/` holding `secret/app1/db`."""
    return FakeReader(
        {
            "sys/internal/ui/mounts/secret/app1/db": mount_response("secret/", {"version": "2"}),
            "secret/data/app1/db": SecretResponse(
                data={
                    "data": {"password": "p1"},
                    "metadata": {"version": 3, "destroyed": False},
                },
                request_id="req-1",
            ),
        }
    )


@pytest.fixture
def kv1_reader() -> FakeReader:
    """Reader backed by an unversioned mount at `kv/` holding `kv/app1/db`."""
    return FakeReader(
        {
            "sys/internal/ui/mounts/kv/app1/db": mount_response("kv/", {"version": "1"}),
            "kv/app1/db": SecretResponse(data={"password": "p1"}, lease_duration=2764800),
        }
    )
