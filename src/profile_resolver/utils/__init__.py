"""Utility functions for the Profile Resolver."""

from profile_resolver.utils.log import setup_logging

__all__ = [
    "setup_logging",
]
