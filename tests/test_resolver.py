"""Tests for the chain resolver."""

import pytest

from profile_resolver.engine.resolver import (
    ChainOutcome,
    resolve_profile_chain,
    trace_profile_chain,
)
from profile_resolver.profiles.base import Profile, ProfileSet, ProfileSetBuilder


class CountingProfileSet:
    """Wraps a ProfileSet and counts profile lookups."""

    def __init__(self, profile_set: ProfileSet):
        self._profile_set = profile_set
        self.lookups: list[str] = []

    def is_empty(self) -> bool:
        return self._profile_set.is_empty()

    def selected_profile(self) -> str:
        return self._profile_set.selected_profile()

    def get_profile(self, name: str) -> Profile | None:
        self.lookups.append(name)
        return self._profile_set.get_profile(name)


@pytest.fixture
def chained_set():
    """Profiles covering direct hits, chains, self-references and cycles."""
    return (
        ProfileSetBuilder()
        .profile("default", output="json")
        .profile("base", region="us-east-1")
        .profile("credentials", region="us-east-1", aws_access_key_id="key")
        .profile("needs-source", role_arn="arn:aws:iam::123456789012:role/test")
        .source("needs-source", "credentials")
        .source("p", "p")
        .source("a", "b")
        .source("b", "a")
        .profile("direct", region="eu-west-1")
        .source("direct", "base")
        .source("dangling", "nowhere")
        .build()
    )


class TestResolveProfileChain:
    """Tests for resolve_profile_chain."""

    def test_empty_set_returns_none(self):
        empty = ProfileSet()

        assert resolve_profile_chain(empty, None, "region") is None
        assert resolve_profile_chain(empty, "base", "region") is None
        assert resolve_profile_chain(empty, "", "anything") is None

    def test_empty_set_does_no_lookups(self):
        counting = CountingProfileSet(ProfileSet())

        assert resolve_profile_chain(counting, "base", "region") is None
        assert counting.lookups == []

    def test_direct_value(self, chained_set):
        assert resolve_profile_chain(chained_set, "base", "region") == "us-east-1"

    def test_direct_value_wins_over_source_profile(self, chained_set):
        assert resolve_profile_chain(chained_set, "direct", "region") == "eu-west-1"

    def test_value_from_source_profile(self, chained_set):
        assert resolve_profile_chain(chained_set, "needs-source", "region") == "us-east-1"

    def test_own_keys_still_resolve_on_chained_profile(self, chained_set):
        assert (
            resolve_profile_chain(chained_set, "needs-source", "role_arn")
            == "arn:aws:iam::123456789012:role/test"
        )

    def test_self_reference_returns_none(self, chained_set):
        assert resolve_profile_chain(chained_set, "p", "region") is None

    def test_cycle_returns_none(self, chained_set):
        assert resolve_profile_chain(chained_set, "a", "region") is None
        assert resolve_profile_chain(chained_set, "b", "region") is None

    def test_cycle_terminates_within_profile_count(self):
        profile_set = (
            ProfileSetBuilder()
            .source("a", "b")
            .source("b", "a")
            .build()
        )
        counting = CountingProfileSet(profile_set)

        assert resolve_profile_chain(counting, "a", "region") is None
        assert counting.lookups == ["a", "b", "a"]
        assert len(counting.lookups) <= len(profile_set) + 1

    def test_long_cycle_terminates(self):
        builder = ProfileSetBuilder()
        names = [f"p{i}" for i in range(50)]
        for current, following in zip(names, names[1:] + names[:1]):
            builder.source(current, following)
        profile_set = builder.build()
        counting = CountingProfileSet(profile_set)

        assert resolve_profile_chain(counting, "p0", "region") is None
        assert len(counting.lookups) == len(profile_set) + 1

    def test_chain_into_cycle_returns_value_before_cycle(self):
        profile_set = (
            ProfileSetBuilder()
            .source("start", "a")
            .source("a", "b")
            .profile("b", region="ap-south-1")
            .source("b", "a")
            .build()
        )

        assert resolve_profile_chain(profile_set, "start", "region") == "ap-south-1"

    def test_override_takes_precedence_over_selected_profile(self, chained_set):
        assert chained_set.selected_profile() == "default"

        assert resolve_profile_chain(chained_set, "base", "region") == "us-east-1"
        assert resolve_profile_chain(chained_set, None, "region") is None

    def test_selected_profile_used_without_override(self):
        profile_set = (
            ProfileSetBuilder(selected_profile="base")
            .profile("base", region="us-east-1")
            .build()
        )

        assert resolve_profile_chain(profile_set, None, "region") == "us-east-1"

    def test_nonexistent_override_returns_none(self, chained_set):
        assert resolve_profile_chain(chained_set, "doesnotexist", "region") is None

    def test_empty_string_override_is_not_ignored(self):
        profile_set = ProfileSetBuilder().profile("default", region="us-east-1").build()

        assert resolve_profile_chain(profile_set, "", "region") is None

    def test_missing_source_profile_returns_none(self, chained_set):
        assert resolve_profile_chain(chained_set, "dangling", "region") is None

    def test_key_absent_without_source_returns_none(self, chained_set):
        assert resolve_profile_chain(chained_set, "base", "output") is None

    def test_source_profile_key_resolves_to_its_own_value(self, chained_set):
        assert resolve_profile_chain(chained_set, "needs-source", "source_profile") == "credentials"

    def test_resolution_does_not_modify_profile_set(self, chained_set):
        before = chained_set.model_dump()

        resolve_profile_chain(chained_set, "a", "region")
        resolve_profile_chain(chained_set, "needs-source", "region")

        assert chained_set.model_dump() == before


class TestTraceProfileChain:
    """Tests for trace_profile_chain outcomes."""

    def test_found(self, chained_set):
        trace = trace_profile_chain(chained_set, "needs-source", "region")

        assert trace.found
        assert trace.outcome == ChainOutcome.FOUND
        assert trace.value == "us-east-1"
        assert trace.visited == ["needs-source", "credentials"]
        assert trace.last_profile == "credentials"

    def test_empty(self):
        trace = trace_profile_chain(ProfileSet(), None, "region")

        assert trace.outcome == ChainOutcome.EMPTY
        assert trace.visited == []
        assert trace.value is None

    def test_missing_profile(self, chained_set):
        trace = trace_profile_chain(chained_set, "dangling", "region")

        assert trace.outcome == ChainOutcome.MISSING_PROFILE
        assert trace.visited == ["dangling"]
        assert trace.last_profile == "nowhere"

    def test_key_absent(self, chained_set):
        trace = trace_profile_chain(chained_set, None, "region")

        assert trace.outcome == ChainOutcome.KEY_ABSENT
        assert trace.visited == ["default"]

    def test_self_reference(self, chained_set):
        trace = trace_profile_chain(chained_set, "p", "region")

        assert trace.outcome == ChainOutcome.SELF_REFERENCE
        assert trace.visited == ["p"]

    def test_cycle(self, chained_set):
        trace = trace_profile_chain(chained_set, "a", "region")

        assert trace.outcome == ChainOutcome.CYCLE
        assert trace.visited == ["a", "b"]
        assert trace.last_profile == "a"

    def test_trace_value_matches_resolve(self, chained_set):
        for start in ["default", "base", "needs-source", "p", "a", "dangling", "doesnotexist"]:
            trace = trace_profile_chain(chained_set, start, "region")
            assert trace.value == resolve_profile_chain(chained_set, start, "region")
