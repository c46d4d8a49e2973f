"""
Tests for card templates, catalogue lookup and catalogue validation.
"""

import pytest

from ..card_schema import (
    CatalogueValidationError,
    EffectKind,
    ThreatKind,
    assert_valid,
    validate_catalogue,
)
from ..card_schema.effect_dsl import damage, send_to_infirmary
from ..card_schema.threat_card import ThreatCard, ThreatSymbol
from ..catalogue import (
    ALL_CARDS,
    CARDS_BY_ID,
    CORE_CARDS,
    BOSS_CARD,
    FILLER_CARD,
    UnknownCardError,
    get_card,
)
from ..catalogue.cards import DISTRACTED, DISTRACTED_2, SCOUT


class TestCatalogue:
    """Tests for the shipped catalogue."""

    def test_core_size(self):
        assert len(CORE_CARDS) == 24
        assert sum(1 for c in CORE_CARDS if c.kind == ThreatKind.INTERNAL) == 14
        assert sum(1 for c in CORE_CARDS if c.kind == ThreatKind.EXTERNAL) == 9

    def test_catalogue_is_valid(self):
        result = validate_catalogue(ALL_CARDS)
        assert result.valid, result.errors
        assert result.warnings == []

    def test_lookup(self):
        assert get_card("pirates").max_health == 4
        assert get_card(BOSS_CARD.id) is BOSS_CARD
        assert get_card(FILLER_CARD.id) is FILLER_CARD
        assert "distracted-3" in CARDS_BY_ID

    def test_unknown_card(self):
        with pytest.raises(UnknownCardError):
            get_card("black-hole")
        with pytest.raises(KeyError):
            get_card("black-hole")

    def test_variant_keeps_rules(self):
        """Variants share everything but the id."""
        assert DISTRACTED_2.id == "distracted-2"
        assert DISTRACTED_2.effect == DISTRACTED.effect
        assert DISTRACTED_2.reveal == DISTRACTED.reveal

    def test_combat_cards(self):
        assert SCOUT.is_combat
        assert get_card("ouroboros-barrier").is_combat
        assert not DISTRACTED.is_combat


class TestEffects:
    """Tests for effect descriptor helpers."""

    def test_damage(self):
        effect = damage(hull=2, shields=1)
        assert effect.kind == EffectKind.DAMAGE
        assert effect.deals_damage
        assert (effect.hull_damage, effect.shield_damage) == (2, 1)

    def test_infirmary(self):
        effect = send_to_infirmary(2)
        assert effect.kind == EffectKind.SEND_TO_INFIRMARY
        assert effect.count == 2
        assert not effect.deals_damage


class TestValidation:
    """Tests for catalogue validation."""

    def test_duplicate_ids(self):
        result = validate_catalogue((*ALL_CARDS, SCOUT))
        assert not result.valid
        assert any("Duplicate" in e for e in result.errors)

    def test_needs_one_boss(self):
        cards = [c for c in ALL_CARDS if not c.is_boss]
        result = validate_catalogue(cards)
        assert any("final boss" in e for e in result.errors)

    def test_external_needs_health(self):
        broken = ThreatCard(
            id="ghost-ship",
            name="Ghost Ship",
            kind=ThreatKind.EXTERNAL,
            activation=ThreatSymbol.SKULL,
        )
        result = validate_catalogue((*ALL_CARDS, broken))
        assert any("ghost-ship" in e for e in result.errors)

    def test_assert_valid_raises(self):
        with pytest.raises(CatalogueValidationError) as excinfo:
            assert_valid([FILLER_CARD])
        assert excinfo.value.errors
