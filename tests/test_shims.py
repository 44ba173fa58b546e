"""Tests for the file system and environment shims."""

import pytest

from profile_resolver.shims import (
    Env,
    Fs,
    NoTrafficConnector,
    ProviderConfig,
    no_traffic_connector,
)


class TestEnv:
    """Tests for Env."""

    def test_from_mapping(self):
        env = Env.from_mapping({"AWS_PROFILE": "base"})

        assert env.get("AWS_PROFILE") == "base"
        assert env.get("HOME") is None

    def test_real_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("PROFILE_RESOLVER_TEST_VAR", "value")

        assert Env.real().get("PROFILE_RESOLVER_TEST_VAR") == "value"

    def test_mapping_is_copied(self):
        variables = {"HOME": "/home"}
        env = Env.from_mapping(variables)
        variables["HOME"] = "/elsewhere"

        assert env.get("HOME") == "/home"


class TestFs:
    """Tests for Fs."""

    @pytest.mark.asyncio
    async def test_from_mapping(self):
        fs = Fs.from_mapping({"/home/.aws/config": "[default]\n"})

        assert await fs.read_to_end("/home/.aws/config") == b"[default]\n"

    @pytest.mark.asyncio
    async def test_from_mapping_missing_file(self):
        fs = Fs.from_mapping({})

        with pytest.raises(FileNotFoundError):
            await fs.read_to_end("/home/.aws/config")

    @pytest.mark.asyncio
    async def test_from_test_dir(self, tmp_path):
        (tmp_path / "home" / ".aws").mkdir(parents=True)
        (tmp_path / "home" / ".aws" / "config").write_text("[default]\nregion = us-east-1\n")

        fs = Fs.from_test_dir(tmp_path, "/")

        assert await fs.read_to_end("/home/.aws/config") == b"[default]\nregion = us-east-1\n"

        with pytest.raises(FileNotFoundError):
            await fs.read_to_end("/home/.aws/credentials")

    @pytest.mark.asyncio
    async def test_from_test_dir_with_namespace(self, tmp_path):
        (tmp_path / "config").write_text("[default]\n")

        fs = Fs.from_test_dir(tmp_path, "/home/.aws")

        assert await fs.read_to_end("/home/.aws/config") == b"[default]\n"

        with pytest.raises(FileNotFoundError):
            await fs.read_to_end("/etc/config")

    @pytest.mark.asyncio
    async def test_real(self, tmp_path):
        path = tmp_path / "config"
        path.write_bytes(b"[default]\n")

        assert await Fs.real().read_to_end(path) == b"[default]\n"


class TestProviderConfig:
    """Tests for ProviderConfig."""

    def test_with_methods_return_copies(self):
        base = ProviderConfig.empty()
        env = Env.from_mapping({"HOME": "/home"})
        fs = Fs.from_mapping({"/home/.aws/config": ""})
        connector = no_traffic_connector()

        configured = base.with_env(env).with_fs(fs).with_http_connector(connector)

        assert configured.env is env
        assert configured.fs is fs
        assert configured.http_connector is connector
        assert base.env is not env
        assert base.http_connector is None

    def test_empty_has_no_environment(self):
        assert ProviderConfig.empty().env.get("HOME") is None

    def test_no_traffic_connector_refuses_requests(self):
        with pytest.raises(RuntimeError):
            NoTrafficConnector()("GET https://example.com")
