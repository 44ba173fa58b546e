"""Profile file providers.

A provider loads the shared configuration files through its injected shims
and resolves one setting through the ``source_profile`` chain. Every call
reloads from scratch; nothing is cached between calls.

Example config file::

    [default]
    region = us-west-2

    [profile other]
    source_profile = default

With no overrides, ``region`` resolves to ``us-west-2``. It resolves to the
same value for ``other``, inherited through ``source_profile``.
"""

import logging

from pydantic import BaseModel, ConfigDict

from profile_resolver.engine.resolver import trace_profile_chain
from profile_resolver.exceptions import ProfileParseError
from profile_resolver.profiles.loader import load_profile_set
from profile_resolver.shims.provider_config import ProviderConfig

logger = logging.getLogger(__name__)

REGION_KEY = "region"


class Region(BaseModel):
    """A region name resolved from configuration."""

    model_config = ConfigDict(frozen=True)

    name: str

    def __str__(self) -> str:
        return self.name


class Builder:
    """Fluent builder for profile file providers."""

    def __init__(self, provider_cls: type["ProfileFileProvider"]):
        self._provider_cls = provider_cls
        self._config: ProviderConfig | None = None
        self._profile_override: str | None = None

    def configure(self, config: ProviderConfig) -> "Builder":
        """Override the file system, environment and connector shims."""
        self._config = config
        return self

    def profile_name(self, profile_name: str) -> "Builder":
        """Start resolution at ``profile_name`` instead of the selected profile."""
        self._profile_override = profile_name
        return self

    def build(self) -> "ProfileFileProvider":
        return self._provider_cls(
            config=self._config or ProviderConfig.default(),
            profile_override=self._profile_override,
        )


class ProfileFileProvider:
    """Resolves settings from the active profile of the shared config files.

    To override the selected profile, set ``AWS_PROFILE`` or use
    :meth:`builder` with :meth:`Builder.profile_name`.
    """

    def __init__(
        self,
        config: ProviderConfig | None = None,
        profile_override: str | None = None,
    ):
        self._config = config or ProviderConfig.default()
        self._profile_override = profile_override

    @classmethod
    def builder(cls) -> Builder:
        return Builder(cls)

    @property
    def profile_override(self) -> str | None:
        return self._profile_override

    async def resolve_setting(self, key: str) -> str | None:
        """Load the profile files and resolve ``key`` through the profile chain.

        Parse failures are logged and treated as "no configuration".

        Returns:
            The resolved value, or None if it could not be resolved
        """
        try:
            profile_set = await load_profile_set(self._config.fs, self._config.env)
        except ProfileParseError as e:
            logger.warning("Failed to parse profile: %s", e)
            return None

        trace = trace_profile_chain(profile_set, self._profile_override, key)
        if trace.found:
            logger.debug(
                "Resolved '%s' from profile '%s' (chain: %s)",
                key, trace.last_profile, " -> ".join(trace.visited),
            )
        else:
            logger.debug(
                "Could not resolve '%s': %s (chain: %s)",
                key, trace.outcome.value, " -> ".join(trace.visited) or "-",
            )
        return trace.value


class ProfileFileRegionProvider(ProfileFileProvider):
    """Loads the ``region`` setting from the active profile.

    This provider is meant to sit in a chain of region providers: ``None``
    means "try the next one".
    """

    async def region(self) -> Region | None:
        value = await self.resolve_setting(REGION_KEY)
        if value is None:
            return None
        return Region(name=value)
