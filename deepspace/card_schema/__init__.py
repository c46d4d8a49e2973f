"""Card schema - threat card templates and effect descriptors."""

from .threat_card import (
    ThreatCard,
    ThreatKind,
    ThreatSymbol,
    CrewFace,
    ResolutionRequirement,
)
from .effect_dsl import (
    Effect,
    EffectKind,
    RevealEffect,
    RevealKind,
    PassiveKind,
    NO_EFFECT,
)
from .validation import (
    validate_catalogue,
    assert_valid,
    CatalogueValidationError,
    ValidationResult,
)

__all__ = [
    "ThreatCard",
    "ThreatKind",
    "ThreatSymbol",
    "CrewFace",
    "ResolutionRequirement",
    "Effect",
    "EffectKind",
    "RevealEffect",
    "RevealKind",
    "PassiveKind",
    "NO_EFFECT",
    "validate_catalogue",
    "assert_valid",
    "CatalogueValidationError",
    "ValidationResult",
]
