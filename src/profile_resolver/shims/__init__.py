"""Shims module - the seam between providers and the operating system.

Providers read files and environment variables only through these shims so
that tests can run against fixture directories and in-memory mappings.
"""

from profile_resolver.shims.os_shim import Env, Fs
from profile_resolver.shims.provider_config import (
    NoTrafficConnector,
    ProviderConfig,
    no_traffic_connector,
)

__all__ = [
    "Env",
    "Fs",
    "NoTrafficConnector",
    "ProviderConfig",
    "no_traffic_connector",
]
