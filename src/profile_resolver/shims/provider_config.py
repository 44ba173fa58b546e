"""Configuration injected into providers."""

from typing import Any, Callable

from profile_resolver.shims.os_shim import Env, Fs


class NoTrafficConnector:
    """HTTP connector stub that refuses to send anything.

    Used for provider configurations that must stay off the network.
    """

    def __call__(self, request: Any) -> Any:
        raise RuntimeError(f"Network traffic is not allowed (attempted request: {request!r})")

    def __repr__(self) -> str:
        return "NoTrafficConnector()"


def no_traffic_connector() -> NoTrafficConnector:
    return NoTrafficConnector()


class ProviderConfig:
    """Bundle of the OS shims and HTTP connector a provider runs against.

    ``with_*`` methods return modified copies; instances are never mutated.
    """

    def __init__(
        self,
        fs: Fs,
        env: Env,
        http_connector: Callable[[Any], Any] | None = None,
    ):
        self._fs = fs
        self._env = env
        self._http_connector = http_connector

    @classmethod
    def default(cls) -> "ProviderConfig":
        """Configuration backed by the real file system and environment."""
        return cls(fs=Fs.real(), env=Env.real())

    @classmethod
    def empty(cls) -> "ProviderConfig":
        """Configuration with no files and no environment variables."""
        return cls(fs=Fs.from_mapping({}), env=Env.from_mapping({}))

    @property
    def fs(self) -> Fs:
        return self._fs

    @property
    def env(self) -> Env:
        return self._env

    @property
    def http_connector(self) -> Callable[[Any], Any] | None:
        return self._http_connector

    def with_fs(self, fs: Fs) -> "ProviderConfig":
        return ProviderConfig(fs=fs, env=self._env, http_connector=self._http_connector)

    def with_env(self, env: Env) -> "ProviderConfig":
        return ProviderConfig(fs=self._fs, env=env, http_connector=self._http_connector)

    def with_http_connector(self, connector: Callable[[Any], Any]) -> "ProviderConfig":
        return ProviderConfig(fs=self._fs, env=self._env, http_connector=connector)

    def __repr__(self) -> str:
        return f"ProviderConfig(fs={self._fs!r}, env={self._env!r}, http_connector={self._http_connector!r})"
