"""Generation context: scope stack, bias table and choice history."""

from blathr.core.context.models import (
    ContextCheckpoint,
    GenerationContext,
    GenerationHistory,
    PhraseFeatures,
    ScopeFrame,
)

__all__ = [
    "ContextCheckpoint",
    "GenerationContext",
    "GenerationHistory",
    "PhraseFeatures",
    "ScopeFrame",
]
