"""Profiles module - the data layer of the resolver.

Profiles are named bags of settings loaded from shared configuration files:
- Settings are plain string key/value pairs
- ``source_profile`` links one profile to another
- A ProfileSet records which profile is selected by default

They contain no resolution logic.
"""

from profile_resolver.profiles.base import (
    DEFAULT_PROFILE_NAME,
    SOURCE_PROFILE_KEY,
    Profile,
    ProfileSet,
    ProfileSetBuilder,
)
from profile_resolver.profiles.loader import (
    ProfileLoader,
    load_profile_set,
    profile_set_to_yaml,
)

__all__ = [
    "DEFAULT_PROFILE_NAME",
    "SOURCE_PROFILE_KEY",
    "Profile",
    "ProfileSet",
    "ProfileSetBuilder",
    "ProfileLoader",
    "load_profile_set",
    "profile_set_to_yaml",
]
