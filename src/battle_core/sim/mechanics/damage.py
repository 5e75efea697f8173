"""Damage calculation and resolution.

Implements the mitigation pipeline:
    base + attacker strength -> defender weak multiplier -> defender
    vulnerable multiplier -> floor

Then consumes the defender's pools: block absorbs first, then armor, and
whatever is left is HP damage.  The resolver never mutates HP; the
orchestrator applies ``hp_damage`` itself.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from battle_core.ir.status_effects import EffectKind
from battle_core.sim.core.entities import TargetId
from battle_core.sim.core.rules import CombatRules
from battle_core.sim.mechanics.block import MitigationTracker
from battle_core.sim.mechanics.status_effects import StatusLedger

logger = logging.getLogger(__name__)


@dataclass
class DamageBreakdown:
    """Modifier contributions for one hit, before mitigation."""

    base_damage: int
    final_damage: int
    strength: int | float = 0
    weak: int | float = 0
    vulnerable: int | float = 0


@dataclass
class DamageResult:
    """Outcome of :meth:`DamageResolver.compute_damage`.

    Attributes
    ----------
    hp_damage:
        Damage left after block and armor; what the defender's HP loses.
    block_consumed:
        Block removed from the defender.
    armor_consumed:
        Armor removed from the defender.
    total_damage:
        Post-modifier, pre-mitigation damage, for the combat log.
    breakdown:
        The modifier contributions that produced ``total_damage``.
    """

    hp_damage: int
    block_consumed: int
    armor_consumed: int
    total_damage: int
    breakdown: DamageBreakdown | None = None


class DamageResolver:
    """Resolves attacks against the session's ledger and mitigation pools."""

    def __init__(
        self,
        ledger: StatusLedger,
        mitigation: MitigationTracker,
        rules: CombatRules | None = None,
    ) -> None:
        self.ledger = ledger
        self.mitigation = mitigation
        self.rules = rules or CombatRules()

    def calculate_damage(
        self,
        base_damage: int,
        attacker: TargetId,
        defender: TargetId,
    ) -> DamageBreakdown:
        """Calculate final damage after all modifiers, touching no state.

        Pipeline (order matters):
            1. Add attacker's strength
            2. If defender is weak: multiply by its multiplier (floor)
            3. If defender is vulnerable: multiply by its multiplier (floor)
            4. Clamp to the configured damage floor
        """
        damage = base_damage

        # Step 1: Add strength
        strength = self.ledger.query(attacker, EffectKind.STRENGTH)
        damage += strength

        # Step 2: Weak multiplier (on defender)
        weak = self.ledger.query(defender, EffectKind.WEAK)
        if weak > 0:
            damage = math.floor(damage * self._multiplier(EffectKind.WEAK))

        # Step 3: Vulnerable multiplier (on defender)
        vulnerable = self.ledger.query(defender, EffectKind.VULNERABLE)
        if vulnerable > 0:
            damage = math.floor(damage * self._multiplier(EffectKind.VULNERABLE))

        # Step 4: Floor
        damage = max(self.rules.damage_floor, int(damage))

        return DamageBreakdown(
            base_damage=base_damage,
            final_damage=damage,
            strength=strength,
            weak=weak,
            vulnerable=vulnerable,
        )

    def compute_damage(
        self,
        base_damage: int,
        attacker: TargetId,
        defender: TargetId,
    ) -> DamageResult:
        """Calculate damage and consume the defender's block, then armor."""
        breakdown = self.calculate_damage(base_damage, attacker, defender)
        damage = breakdown.final_damage

        block_consumed, armor_consumed, hp_damage = self.mitigation.state(defender).absorb(damage)

        logger.debug(
            "%r -> %r: %d damage (%d blocked, %d armor, %d hp)",
            attacker, defender, damage, block_consumed, armor_consumed, hp_damage,
        )
        return DamageResult(
            hp_damage=hp_damage,
            block_consumed=block_consumed,
            armor_consumed=armor_consumed,
            total_damage=damage,
            breakdown=breakdown,
        )

    def _multiplier(self, kind: EffectKind) -> float:
        multiplier = self.ledger.catalog.lookup(kind).damage_multiplier
        return multiplier if multiplier is not None else 1.0
