"""Base classes for Profiles and ProfileSets.

A Profile is a named bag of string settings. A ProfileSet is the collection
of profiles loaded from shared configuration files, plus the name of the
profile selected by default.

Profiles may point at another profile through the reserved ``source_profile``
key. These references are not checked here: dangling references and cycles
are valid data and are handled by the chain resolver at read time.
"""

from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field


SOURCE_PROFILE_KEY = "source_profile"
DEFAULT_PROFILE_NAME = "default"


class Profile(BaseModel):
    """A named, immutable bag of configuration settings."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Profile name, unique within its ProfileSet")
    properties: dict[str, str] = Field(
        default_factory=dict,
        description="Setting key to value mapping"
    )

    def get(self, key: str) -> str | None:
        """Get a setting value, or None if the profile does not define it."""
        return self.properties.get(key)

    @property
    def source_profile(self) -> str | None:
        """Name of the profile this one inherits unset settings from."""
        return self.get(SOURCE_PROFILE_KEY)

    def keys(self) -> list[str]:
        return list(self.properties.keys())

    def __contains__(self, key: str) -> bool:
        return key in self.properties


class ProfileSet(BaseModel):
    """All profiles loaded from configuration sources.

    Lookups never raise: a missing profile is reported as None.
    """

    model_config = ConfigDict(frozen=True)

    profiles: dict[str, Profile] = Field(
        default_factory=dict,
        description="Profiles keyed by name"
    )
    selected_profile_name: str = Field(
        default=DEFAULT_PROFILE_NAME,
        description="Profile used when no explicit override is given"
    )

    def is_empty(self) -> bool:
        return len(self.profiles) == 0

    def get_profile(self, name: str) -> Profile | None:
        """Get a profile by name, or None if it does not exist."""
        return self.profiles.get(name)

    def selected_profile(self) -> str:
        """Name of the selected profile. It need not exist in the set."""
        return self.selected_profile_name

    def profile_names(self) -> list[str]:
        return list(self.profiles.keys())

    def iter_profiles(self) -> Iterator[Profile]:
        return iter(self.profiles.values())

    def __len__(self) -> int:
        return len(self.profiles)

    def __contains__(self, name: str) -> bool:
        return name in self.profiles


class ProfileSetBuilder:
    """Fluent builder for creating ProfileSets."""

    def __init__(self, selected_profile: str = DEFAULT_PROFILE_NAME):
        self._selected_profile = selected_profile
        self._profiles: dict[str, dict[str, str]] = {}

    def selected_profile(self, name: str) -> "ProfileSetBuilder":
        self._selected_profile = name
        return self

    def profile(self, name: str, **properties: str) -> "ProfileSetBuilder":
        """Add a profile, merging into any settings already added under ``name``."""
        self._profiles.setdefault(name, {}).update(properties)
        return self

    def source(self, name: str, source_profile: str) -> "ProfileSetBuilder":
        self._profiles.setdefault(name, {})[SOURCE_PROFILE_KEY] = source_profile
        return self

    def build(self) -> ProfileSet:
        return ProfileSet(
            profiles={
                name: Profile(name=name, properties=dict(properties))
                for name, properties in self._profiles.items()
            },
            selected_profile_name=self._selected_profile,
        )
