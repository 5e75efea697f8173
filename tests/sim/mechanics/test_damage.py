"""Tests for damage calculation and mitigation consumption."""

import pytest

from battle_core.ir.status_effects import EffectClass, EffectDefinition, EffectKind
from battle_core.sim.content.registry import VANILLA_EFFECTS, EffectCatalog
from battle_core.sim.core.rules import CombatRules
from battle_core.sim.mechanics.block import MitigationTracker
from battle_core.sim.mechanics.damage import DamageResolver
from battle_core.sim.mechanics.status_effects import StatusLedger


# ---------------------------------------------------------------------------
# calculate_damage -- base and strength
# ---------------------------------------------------------------------------

class TestCalculateDamageBase:
    def test_base_damage(self, resolver):
        assert resolver.calculate_damage(6, "player", "enemy").final_damage == 6

    def test_zero_base_damage(self, resolver):
        assert resolver.calculate_damage(0, "player", "enemy").final_damage == 0

    def test_negative_base_clamps_to_zero(self, resolver):
        assert resolver.calculate_damage(-4, "player", "enemy").final_damage == 0

    def test_strength_adds_to_damage(self, ledger, resolver):
        ledger.apply("player", EffectKind.STRENGTH, 3, 2)

        breakdown = resolver.calculate_damage(6, "player", "enemy")
        assert breakdown.final_damage == 9
        assert breakdown.strength == 3

    def test_defender_strength_ignored(self, ledger, resolver):
        ledger.apply("enemy", EffectKind.STRENGTH, 3, 2)

        assert resolver.calculate_damage(6, "player", "enemy").final_damage == 6

    def test_preview_consumes_nothing(self, mitigation, resolver):
        mitigation.add_block("enemy", 5)
        resolver.calculate_damage(10, "player", "enemy")

        assert mitigation.block("enemy") == 5


# ---------------------------------------------------------------------------
# calculate_damage -- multipliers
# ---------------------------------------------------------------------------

class TestCalculateDamageMultipliers:
    def test_weak_on_defender(self, ledger, resolver):
        ledger.apply("enemy", EffectKind.WEAK, 1, 2)

        # floor(10 * 0.75) = 7
        assert resolver.calculate_damage(10, "player", "enemy").final_damage == 7

    def test_vulnerable_on_defender(self, ledger, resolver):
        ledger.apply("enemy", EffectKind.VULNERABLE, 1, 2)

        # floor(7 * 1.5) = 10
        assert resolver.calculate_damage(7, "player", "enemy").final_damage == 10

    def test_full_pipeline_order(self, ledger, resolver):
        ledger.apply("player", EffectKind.STRENGTH, 5, 2)
        ledger.apply("enemy", EffectKind.WEAK, 1, 2)
        ledger.apply("enemy", EffectKind.VULNERABLE, 1, 2)

        # 10 + 5 = 15 -> floor(15 * 0.75) = 11 -> floor(11 * 1.5) = 16
        breakdown = resolver.calculate_damage(10, "player", "enemy")
        assert breakdown.final_damage == 16
        assert (breakdown.strength, breakdown.weak, breakdown.vulnerable) == (5, 1, 1)

    def test_zero_magnitude_modifier_has_no_effect(self, ledger, resolver):
        ledger.apply("enemy", EffectKind.VULNERABLE, 0, 2)

        assert resolver.calculate_damage(10, "player", "enemy").final_damage == 10

    def test_multipliers_come_from_catalog(self):
        defs = [d for d in VANILLA_EFFECTS if d.kind != "vulnerable"]
        defs.append(
            EffectDefinition(
                kind="vulnerable", name="Vulnerable", classification=EffectClass.DEBUFF,
                damage_multiplier=2.0,
            )
        )
        ledger = StatusLedger(EffectCatalog(defs))
        resolver = DamageResolver(ledger, MitigationTracker(ledger))
        ledger.apply("enemy", EffectKind.VULNERABLE, 1, 1)

        assert resolver.calculate_damage(7, "player", "enemy").final_damage == 14


# ---------------------------------------------------------------------------
# calculate_damage -- damage floor rule
# ---------------------------------------------------------------------------

class TestDamageFloor:
    @pytest.fixture
    def chip_resolver(self, ledger, mitigation):
        return DamageResolver(ledger, mitigation, CombatRules(damage_floor=1))

    def test_default_floor_allows_zero(self, ledger, resolver):
        ledger.apply("enemy", EffectKind.WEAK, 1, 1)

        # floor(1 * 0.75) = 0
        assert resolver.calculate_damage(1, "player", "enemy").final_damage == 0

    def test_chip_floor_keeps_weakened_hit_at_one(self, ledger, chip_resolver):
        ledger.apply("enemy", EffectKind.WEAK, 1, 1)

        # floor(1 * 0.75) = 0, raised to the 1-point floor
        assert chip_resolver.calculate_damage(1, "player", "enemy").final_damage == 1

    def test_chip_floor_raises_zero_hit(self, chip_resolver):
        assert chip_resolver.calculate_damage(0, "player", "enemy").final_damage == 1

    def test_chip_floor_raises_negative_hit(self, chip_resolver):
        assert chip_resolver.calculate_damage(-3, "player", "enemy").final_damage == 1

    def test_chip_damage_reaches_hp(self, chip_resolver, mitigation):
        result = chip_resolver.compute_damage(0, "player", "enemy")

        assert (result.total_damage, result.hp_damage) == (1, 1)

    def test_chip_floor_does_not_change_positive_hits(self, chip_resolver):
        assert chip_resolver.calculate_damage(5, "player", "enemy").final_damage == 5


# ---------------------------------------------------------------------------
# compute_damage -- block before armor
# ---------------------------------------------------------------------------

class TestMitigationOrder:
    def test_block_then_armor(self, mitigation, resolver):
        mitigation.add_block("enemy", 5)
        mitigation.add_armor("enemy", 10)

        result = resolver.compute_damage(12, "player", "enemy")
        assert result.block_consumed == 5
        assert result.armor_consumed == 7
        assert result.hp_damage == 0
        assert result.total_damage == 12
        assert mitigation.block("enemy") == 0
        assert mitigation.armor("enemy") == 3

    def test_both_pools_exhausted(self, mitigation, resolver):
        mitigation.add_block("enemy", 5)
        mitigation.add_armor("enemy", 10)

        result = resolver.compute_damage(15, "player", "enemy")
        assert (result.block_consumed, result.armor_consumed, result.hp_damage) == (5, 10, 0)
        assert mitigation.block("enemy") == 0
        assert mitigation.armor("enemy") == 0

    def test_overflow_reaches_hp(self, mitigation, resolver):
        mitigation.add_block("enemy", 3)
        mitigation.add_armor("enemy", 2)

        result = resolver.compute_damage(10, "player", "enemy")
        assert result.hp_damage == 5

    def test_block_only(self, mitigation, resolver):
        mitigation.add_block("enemy", 10)
        mitigation.add_armor("enemy", 10)

        result = resolver.compute_damage(4, "player", "enemy")
        assert (result.block_consumed, result.armor_consumed, result.hp_damage) == (4, 0, 0)
        assert mitigation.block("enemy") == 6
        assert mitigation.armor("enemy") == 10

    def test_no_pools(self, resolver):
        result = resolver.compute_damage(8, "player", "enemy")

        assert (result.block_consumed, result.armor_consumed, result.hp_damage) == (0, 0, 8)

    def test_zero_damage_consumes_nothing(self, mitigation, resolver):
        mitigation.add_block("enemy", 5)

        result = resolver.compute_damage(0, "player", "enemy")
        assert result.block_consumed == 0
        assert mitigation.block("enemy") == 5

    def test_total_damage_is_post_modifier(self, ledger, mitigation, resolver):
        ledger.apply("enemy", EffectKind.VULNERABLE, 1, 1)
        mitigation.add_block("enemy", 20)

        result = resolver.compute_damage(10, "player", "enemy")
        assert result.total_damage == 15
        assert result.hp_damage == 0
        assert result.breakdown.base_damage == 10
