"""Chain Resolver - follows ``source_profile`` links to find a setting.

Starting from the override profile (or the set's selected profile), each
profile is checked for the requested key. If the key is missing, resolution
moves on to the profile named by ``source_profile``. The walk is iterative
and keeps the names it has visited, so self-references and cycles end the
walk instead of looping forever: at most N+1 steps for N profiles.

Every failure mode resolves to ``None``. Nothing here raises, logs or keeps
state between calls.
"""

from dataclasses import dataclass, field
from enum import Enum

from profile_resolver.profiles.base import SOURCE_PROFILE_KEY, ProfileSet


class ChainOutcome(str, Enum):
    """Why a chain walk stopped."""

    FOUND = "found"
    EMPTY = "empty"
    MISSING_PROFILE = "missing_profile"
    KEY_ABSENT = "key_absent"
    SELF_REFERENCE = "self_reference"
    CYCLE = "cycle"


@dataclass
class ChainTrace:
    """Result of walking a profile chain for one key."""

    key: str
    outcome: ChainOutcome
    value: str | None = None
    visited: list[str] = field(default_factory=list)
    # Name that ended the walk: the profile holding the value, the missing
    # profile, or the profile that closed a cycle.
    last_profile: str | None = None

    @property
    def found(self) -> bool:
        return self.outcome == ChainOutcome.FOUND


def trace_profile_chain(
    profile_set: ProfileSet,
    profile_override: str | None,
    key: str,
) -> ChainTrace:
    """Walk the ``source_profile`` chain for ``key`` and record how it ended.

    Args:
        profile_set: Profiles to resolve against (read only)
        profile_override: Explicit starting profile; takes precedence over the
            set's selected profile but must still exist
        key: Setting to resolve, e.g. ``"region"``

    Returns:
        ChainTrace with the value (or None), the visited profile names in
        order, and the outcome
    """
    if profile_set.is_empty():
        return ChainTrace(key=key, outcome=ChainOutcome.EMPTY)

    selected_profile = (
        profile_override if profile_override is not None else profile_set.selected_profile()
    )
    visited: list[str] = []

    while True:
        profile = profile_set.get_profile(selected_profile)
        if profile is None:
            return ChainTrace(
                key=key,
                outcome=ChainOutcome.MISSING_PROFILE,
                visited=visited,
                last_profile=selected_profile,
            )

        if selected_profile in visited:
            return ChainTrace(
                key=key,
                outcome=ChainOutcome.CYCLE,
                visited=visited,
                last_profile=selected_profile,
            )
        visited.append(selected_profile)

        value = profile.get(key)
        source_profile = profile.get(SOURCE_PROFILE_KEY)

        if value is not None:
            return ChainTrace(
                key=key,
                outcome=ChainOutcome.FOUND,
                value=value,
                visited=visited,
                last_profile=selected_profile,
            )

        if source_profile is None:
            return ChainTrace(
                key=key,
                outcome=ChainOutcome.KEY_ABSENT,
                visited=visited,
                last_profile=selected_profile,
            )

        # Same answer the visited check gives one step later, minus a lookup
        if source_profile == selected_profile:
            return ChainTrace(
                key=key,
                outcome=ChainOutcome.SELF_REFERENCE,
                visited=visited,
                last_profile=selected_profile,
            )

        selected_profile = source_profile


def resolve_profile_chain(
    profile_set: ProfileSet,
    profile_override: str | None,
    key: str,
) -> str | None:
    """Resolve ``key`` through the profile chain.

    Returns:
        The value from the first profile in the chain that defines ``key``,
        or None if the set is empty, a profile is missing, or the chain ends
        or loops without defining it
    """
    return trace_profile_chain(profile_set, profile_override, key).value
