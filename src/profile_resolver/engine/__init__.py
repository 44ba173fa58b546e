"""Engine module - resolution and diagnostics.

Contains:
- Chain Resolver: follows source_profile links to a setting value
- Validation Engine: reports dangling references and cycles
"""

from profile_resolver.engine.resolver import (
    ChainOutcome,
    ChainTrace,
    resolve_profile_chain,
    trace_profile_chain,
)
from profile_resolver.engine.validation_engine import ValidationEngine, ValidationResult

__all__ = [
    "ChainOutcome",
    "ChainTrace",
    "resolve_profile_chain",
    "trace_profile_chain",
    "ValidationEngine",
    "ValidationResult",
]
