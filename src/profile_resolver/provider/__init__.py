"""Provider module - load-then-resolve wrappers around the chain resolver."""

from profile_resolver.provider.profile_file import (
    REGION_KEY,
    Builder,
    ProfileFileProvider,
    ProfileFileRegionProvider,
    Region,
)

__all__ = [
    "REGION_KEY",
    "Builder",
    "ProfileFileProvider",
    "ProfileFileRegionProvider",
    "Region",
]
