"""Validation Engine - diagnostics for loaded ProfileSets.

The Validation Engine reports:
- Empty profile sets
- A selected profile that does not exist
- ``source_profile`` references to missing profiles
- Self-referencing and cyclic ``source_profile`` chains

Cycles and dangling references are valid data as far as the resolver is
concerned; these checks only explain why a chain resolves to nothing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from profile_resolver.profiles.base import ProfileSet


class ValidationSeverity(str, Enum):
    """Severity levels for validation issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    message: str
    path: str = ""
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
            "context": self.context,
        }


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)
    validated_count: int = 0

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    def add_issue(
        self,
        severity: ValidationSeverity,
        message: str,
        path: str = "",
        **context: Any,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=severity,
                message=message,
                path=path,
                context=context,
            )
        )
        if severity == ValidationSeverity.ERROR:
            self.valid = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "validated_count": self.validated_count,
            "issues": [i.to_dict() for i in self.issues],
        }


class ValidationEngine:
    """Engine for validating ProfileSets."""

    def validate_profile_set(self, profile_set: ProfileSet) -> ValidationResult:
        """Validate a ProfileSet.

        Checks:
        - The set is not empty
        - The selected profile exists
        - Every ``source_profile`` names an existing profile
        - No profile sources itself
        - No ``source_profile`` cycles
        """
        result = ValidationResult(valid=True, validated_count=len(profile_set))

        if profile_set.is_empty():
            result.add_issue(
                ValidationSeverity.INFO,
                "No profiles defined",
            )
            return result

        selected = profile_set.selected_profile()
        if selected not in profile_set:
            result.add_issue(
                ValidationSeverity.WARNING,
                f"Selected profile '{selected}' does not exist",
                path="selected_profile",
                actual=selected,
            )

        for profile in profile_set.iter_profiles():
            source = profile.source_profile
            if source is None:
                continue

            if source == profile.name:
                result.add_issue(
                    ValidationSeverity.WARNING,
                    f"Profile '{profile.name}' uses itself as source_profile",
                    path=f"profiles.{profile.name}.source_profile",
                )
            elif source not in profile_set:
                result.add_issue(
                    ValidationSeverity.ERROR,
                    f"Profile '{profile.name}' references unknown source_profile '{source}'",
                    path=f"profiles.{profile.name}.source_profile",
                    actual=source,
                )

        for cycle in self.find_cycles(profile_set):
            result.add_issue(
                ValidationSeverity.WARNING,
                f"source_profile cycle: {' -> '.join(cycle + [cycle[0]])}",
                path=f"profiles.{cycle[0]}.source_profile",
                members=cycle,
            )

        return result

    def find_cycles(self, profile_set: ProfileSet) -> list[list[str]]:
        """Find ``source_profile`` cycles of two or more profiles.

        Each cycle is reported once, starting from the member the walk
        reaches first. Self-references are not included.
        """
        cycles: list[list[str]] = []
        seen_members: set[str] = set()

        for start in profile_set.profile_names():
            if start in seen_members:
                continue

            path: list[str] = []
            current: str | None = start
            while current is not None and current in profile_set and current not in path:
                path.append(current)
                profile = profile_set.get_profile(current)
                current = profile.source_profile if profile is not None else None

            if current is None or current not in path:
                continue

            cycle = path[path.index(current):]
            if len(cycle) > 1 and not seen_members.intersection(cycle):
                cycles.append(cycle)
            seen_members.update(cycle)

        return cycles
