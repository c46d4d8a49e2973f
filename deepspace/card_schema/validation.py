"""
Catalogue Validation - Sanity checks for threat card catalogues.

Validates that:
1. Card IDs are unique and non-empty
2. Health matches the card kind
3. Resolution requirements are well-formed
4. Exactly one final boss exists and reveal effects are consistent
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from .threat_card import ThreatCard, ThreatKind
from .effect_dsl import EffectKind, RevealKind


class CatalogueValidationError(Exception):
    """Raised when catalogue validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Catalogue validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_catalogue(cards: Iterable[ThreatCard]) -> ValidationResult:
    """
    Validate a collection of distinct card templates.

    Returns ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []
    seen: set[str] = set()
    bosses = 0

    for card in cards:
        if not card.id:
            errors.append("Card has empty ID")
        elif card.id in seen:
            errors.append(f"Duplicate card ID '{card.id}'")
        seen.add(card.id)

        errors.extend(f"Card '{card.id}': {e}" for e in _validate_card(card))
        warnings.extend(f"Card '{card.id}': {w}" for w in _card_warnings(card))

        if card.is_boss:
            bosses += 1

    if bosses != 1:
        errors.append(f"Expected exactly one final boss, found {bosses}")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def assert_valid(cards: Iterable[ThreatCard]) -> None:
    """Raise CatalogueValidationError if the catalogue has errors."""
    result = validate_catalogue(cards)
    if not result.valid:
        raise CatalogueValidationError(result.errors)


def _validate_card(card: ThreatCard) -> list[str]:
    errors = []
    if not card.name:
        errors.append("empty name")
    if card.max_health < 0:
        errors.append("negative max_health")
    if card.is_combat and not card.immediate_on_reveal and card.max_health <= 0:
        errors.append("combat card needs positive max_health")
    if card.kind == ThreatKind.FILLER and card.effect.kind != EffectKind.NONE:
        errors.append("filler card must not carry an effect")
    if card.resolution is not None:
        if card.kind != ThreatKind.INTERNAL:
            errors.append("only internal cards can declare a resolution")
        if card.resolution.count < 1:
            errors.append("resolution count must be >= 1")
    if card.is_barrier and card.kind != ThreatKind.BOSS_BARRIER:
        errors.append("barrier flag requires boss-barrier kind")
    if card.reveal is not None and not card.immediate_on_reveal:
        errors.append("reveal effect on a card not flagged immediate_on_reveal")
    if card.reveal is not None and card.reveal.kind == RevealKind.HULL_STRIKE:
        if card.reveal.hull_damage <= 0:
            errors.append("hull strike needs positive damage")
    return errors


def _card_warnings(card: ThreatCard) -> list[str]:
    warnings = []
    if card.immediate_on_reveal and card.reveal is None:
        warnings.append("flagged immediate_on_reveal without a reveal effect; it will be inert")
    if card.kind == ThreatKind.INTERNAL and card.resolution is None and card.reveal is None:
        warnings.append("internal card with no resolution can never be resolved")
    return warnings
