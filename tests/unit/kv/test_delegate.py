"""
Unit tests for KeyValueDelegate version-aware reads.
"""

import copy

import pytest
from conftest import FakeReader, mount_response

from kvsecrets.errors.errors import MountResolutionError, RemoteCallError
from kvsecrets.kv.delegate import KeyValueDelegate, kv2_data_path, unwrap_data_response
from kvsecrets.kv.mounts import MountResolver
from kvsecrets.types.types import MountInfo, SecretResponse


class TestKv2DataPath:
    """Tests for the versioned path rewrite."""

    @pytest.mark.parametrize(
        "mount,requested,expected",
        [
            ("secret/", "secret/myapp/config", "secret/data/myapp/config"),
            ("secret/", "secret/app1/db", "secret/data/app1/db"),
            ("team/kv/", "team/kv/a", "team/kv/data/a"),
            ("secret/", "secret/", "secret/data/"),
        ],
    )
    def test_rewrites_paths_under_mount(self, mount: str, requested: str, expected: str) -> None:
        assert kv2_data_path(mount, requested) == expected

    def test_path_outside_mount_unchanged(self) -> None:
        assert kv2_data_path("secret/", "other/app1/db") == "other/app1/db"

    def test_prefix_without_separator_unchanged(self) -> None:
        assert kv2_data_path("secret/", "secretive/app") == "secretive/app"


class TestUnwrapDataResponse:
    """Tests for v2 envelope unwrapping."""

    def test_replaces_payload_with_nested_data(self) -> None:
        response = SecretResponse(data={"data": {"k": "v"}, "metadata": {"version": 1}})

        unwrap_data_response(response)

        assert response.data == {"k": "v"}

    def test_preserves_nested_order(self) -> None:
        nested = {"z": 1, "a": 2, "m": 3}
        response = SecretResponse(data={"data": nested})

        unwrap_data_response(response)

        assert list(response.data) == ["z", "a", "m"]

    def test_without_data_key_unchanged(self) -> None:
        response = SecretResponse(data={"keys": ["a", "b"]}, request_id="r")
        before = copy.deepcopy(response)

        unwrap_data_response(response)

        assert response == before

    def test_none_payload_and_none_response(self) -> None:
        response = SecretResponse(data=None)
        unwrap_data_response(response)
        unwrap_data_response(None)

        assert response.data is None


class TestFetchSecret:
    """Scenario tests for fetch_secret."""

    def test_versioned_mount_reads_rewritten_path(self, kv2_reader: FakeReader) -> None:
        kv = KeyValueDelegate(kv2_reader)

        response = kv.fetch_secret("secret/app1/db")

        assert response is not None
        assert response.data == {"password": "p1"}
        assert response.request_id == "req-1"
        assert kv2_reader.calls == [
            "sys/internal/ui/mounts/secret/app1/db",
            "secret/data/app1/db",
        ]

    def test_unversioned_mount_reads_directly(self, kv1_reader: FakeReader) -> None:
        kv = KeyValueDelegate(kv1_reader)
        expected = copy.deepcopy(kv1_reader.answers["kv/app1/db"])

        response = kv.fetch_secret("kv/app1/db")

        assert response == expected
        assert kv1_reader.calls == ["sys/internal/ui/mounts/kv/app1/db", "kv/app1/db"]

    def test_unavailable_mount_reads_once_unmodified(self) -> None:
        raw = SecretResponse(data={"data": {"nested": True}, "other": 1})
        reader = FakeReader({"plain/thing": raw})
        kv = KeyValueDelegate(reader)

        response = kv.fetch_secret("plain/thing")

        assert response is raw
        assert response.data == {"data": {"nested": True}, "other": 1}
        assert reader.count("plain/thing") == 1

    def test_forbidden_lookup_degrades_to_plain_read(self) -> None:
        raw = SecretResponse(data={"password": "p1"})
        reader = FakeReader(
            {
                "sys/internal/ui/mounts/secret/x": RemoteCallError("denied", status_code=403),
                "secret/x": raw,
            }
        )
        kv = KeyValueDelegate(reader)

        assert kv.is_versioned("secret/x") is False
        assert kv.fetch_secret("secret/x") is raw
        assert reader.count("sys/internal/ui/mounts/secret/x") == 2

    def test_absent_secret_returns_none(self) -> None:
        reader = FakeReader(
            {"sys/internal/ui/mounts/secret/missing": mount_response("secret/", {"version": "2"})}
        )
        kv = KeyValueDelegate(reader)

        assert kv.fetch_secret("secret/missing") is None
        assert reader.calls[-1] == "secret/data/missing"

    def test_versioned_response_without_data_key_unchanged(self) -> None:
        raw = SecretResponse(data={"keys": ["a"]})
        reader = FakeReader(
            {
                "sys/internal/ui/mounts/secret/list": mount_response("secret/", {"version": "2"}),
                "secret/data/list": raw,
            }
        )

        response = KeyValueDelegate(reader).fetch_secret("secret/list")

        assert response is raw
        assert response.data == {"keys": ["a"]}

    def test_resolution_failure_aborts_without_read(self) -> None:
        reader = FakeReader(
            {
                "sys/internal/ui/mounts/secret/x": RemoteCallError("boom", status_code=500),
                "secret/x": SecretResponse(data={"k": "v"}),
            }
        )
        kv = KeyValueDelegate(reader)

        with pytest.raises(MountResolutionError):
            kv.fetch_secret("secret/x")

        assert reader.calls == ["sys/internal/ui/mounts/secret/x"]

    def test_read_failure_propagates_unchanged(self, kv2_reader: FakeReader) -> None:
        error = RemoteCallError("server down", status_code=503)
        kv2_reader.answers["secret/data/app1/db"] = error
        kv = KeyValueDelegate(kv2_reader)

        with pytest.raises(RemoteCallError) as exc_info:
            kv.fetch_secret("secret/app1/db")

        assert exc_info.value is error

    def test_repeated_fetch_uses_cached_mount(self, kv2_reader: FakeReader) -> None:
        kv = KeyValueDelegate(kv2_reader)

        kv.fetch_secret("secret/app1/db")
        kv.fetch_secret("secret/app1/db")

        assert kv2_reader.count("sys/internal/ui/mounts/secret/app1/db") == 1
        assert kv2_reader.count("secret/data/app1/db") == 2


class TestDelegateWiring:
    """Tests for resolver and cache injection."""

    def test_shared_resolver(self, kv2_reader: FakeReader) -> None:
        resolver = MountResolver(kv2_reader)
        kv = KeyValueDelegate(kv2_reader, resolver=resolver)

        assert kv.resolver is resolver
        assert kv.resolve_mount_info("secret/app1/db") == resolver.cached("secret/app1/db")

    def test_supplied_cache(self, kv2_reader: FakeReader) -> None:
        cache: dict[str, MountInfo] = {}
        kv = KeyValueDelegate(kv2_reader, cache=cache)

        kv.is_versioned("secret/app1/db")

        assert "secret/app1/db" in cache
