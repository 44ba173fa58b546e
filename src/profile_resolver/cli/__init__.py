"""Command line interface for the Profile Resolver."""
