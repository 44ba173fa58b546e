"""
Profile Resolver - Resolve settings from hierarchical configuration profiles.

Profiles are loaded from shared config and credentials files. A setting that
a profile does not define is inherited through its ``source_profile`` chain,
with self-references and cycles resolving to nothing instead of looping.
"""

__version__ = "0.1.0"

from profile_resolver.profiles.base import Profile, ProfileSet, ProfileSetBuilder
from profile_resolver.engine.resolver import resolve_profile_chain, trace_profile_chain
from profile_resolver.provider.profile_file import (
    ProfileFileProvider,
    ProfileFileRegionProvider,
    Region,
)
from profile_resolver.shims import Env, Fs, ProviderConfig

__all__ = [
    "Profile",
    "ProfileSet",
    "ProfileSetBuilder",
    "resolve_profile_chain",
    "trace_profile_chain",
    "ProfileFileProvider",
    "ProfileFileRegionProvider",
    "Region",
    "Env",
    "Fs",
    "ProviderConfig",
]
