"""Exceptions raised by the Profile Resolver.

Resolution itself never raises: a missing key, a missing profile or a
`source_profile` cycle all resolve to ``None``. Only loading can fail.
"""

from pathlib import Path


class ProfileResolverError(Exception):
    """Base class for all profile resolver errors."""


class ProfileParseError(ProfileResolverError):
    """A shared configuration or credentials file could not be parsed."""

    def __init__(self, path: Path | str, message: str):
        self.path = str(path)
        self.message = message
        super().__init__(f"Failed to parse profile file {self.path}: {message}")
