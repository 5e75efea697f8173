"""CombatSession -- the per-combat owner of all rules-engine state.

One session holds one ledger, one mitigation tracker, one turn processor
and one damage resolver, all wired to the same state.  Sessions share
nothing but the (read-only) effect catalog, so several combats can run
side by side without leaking effects between them.

The orchestrator calls the hooks in this order for each combatant turn::

    session.start_turn(actor)      # durations tick, payloads returned
    ...cards resolve...            # apply_effect / gain_block / attack
    session.end_turn(actor, turn)  # actor's block resets
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from battle_core.ir.status_effects import EffectKind, PayloadType
from battle_core.sim.content.registry import EffectCatalog
from battle_core.sim.core.entities import Combatant, TargetId
from battle_core.sim.core.rules import CombatRules
from battle_core.sim.mechanics.block import MitigationTracker
from battle_core.sim.mechanics.damage import DamageResolver, DamageResult
from battle_core.sim.mechanics.status_effects import StatusLedger
from battle_core.sim.mechanics.turns import (
    EffectPayload,
    TurnEndResult,
    TurnProcessor,
    TurnStartResult,
)

logger = logging.getLogger(__name__)


@dataclass
class AttackOutcome:
    """A resolved attack together with the HP actually lost."""

    result: DamageResult
    hp_lost: int


@dataclass
class TurnStartOutcome:
    """Turn-start processing plus the HP changes from applied payloads."""

    processed: TurnStartResult
    hp_lost: int = 0
    hp_restored: int = 0
    applied: list[EffectPayload] = field(default_factory=list)


class CombatSession:
    """Explicitly constructed rules-engine state for one combat.

    Parameters
    ----------
    catalog:
        Effect metadata.  Defaults to the vanilla catalog.
    rules:
        Tunable rule switches.  Defaults to :class:`CombatRules` defaults.
    """

    def __init__(
        self,
        catalog: EffectCatalog | None = None,
        rules: CombatRules | None = None,
    ) -> None:
        self.rules = rules or CombatRules()
        self.ledger = StatusLedger(catalog)
        self.mitigation = MitigationTracker(self.ledger, self.rules)
        self.turns = TurnProcessor(self.ledger)
        self.resolver = DamageResolver(self.ledger, self.mitigation, self.rules)

    @property
    def catalog(self) -> EffectCatalog:
        return self.ledger.catalog

    # -- orchestrator hooks ----------------------------------------------------

    def apply_effect(
        self,
        target: TargetId,
        kind: EffectKind | str,
        magnitude: int | float = 1,
        duration: int | None = None,
        source: str | None = None,
    ) -> bool:
        return self.ledger.apply(target, kind, magnitude, duration, source)

    def gain_block(self, target: TargetId, base_block: int) -> int:
        return self.mitigation.add_block(target, base_block)

    def gain_armor(self, target: TargetId, amount: int) -> int:
        return self.mitigation.add_armor(target, amount)

    def start_turn(self, target: TargetId) -> TurnStartResult:
        return self.turns.process_turn_start(target)

    def end_turn(self, owner: TargetId, turn: int | None = None) -> TurnEndResult:
        """End *owner*'s turn: report carried-over effects and reset its block."""
        report = self.turns.process_turn_end(owner)
        self.mitigation.clear_block(owner, turn)
        return report

    def compute_damage(self, base_damage: int, attacker: TargetId, defender: TargetId) -> DamageResult:
        return self.resolver.compute_damage(base_damage, attacker, defender)

    # -- combatant helpers -----------------------------------------------------

    def attack(self, base_damage: int, attacker: Combatant, defender: Combatant) -> AttackOutcome:
        """Resolve an attack and apply its HP damage to *defender*."""
        result = self.resolver.compute_damage(base_damage, attacker.id, defender.id)
        hp_lost = defender.lose_hp(result.hp_damage)
        return AttackOutcome(result=result, hp_lost=hp_lost)

    def start_combatant_turn(self, combatant: Combatant) -> TurnStartOutcome:
        """Process turn start for *combatant* and apply its expiry payloads."""
        outcome = TurnStartOutcome(processed=self.turns.process_turn_start(combatant.id))
        for payload in outcome.processed.payloads:
            amount = int(payload.value)
            if payload.type is PayloadType.DAMAGE:
                outcome.hp_lost += combatant.lose_hp(amount)
            elif payload.type is PayloadType.HEAL:
                outcome.hp_restored += combatant.heal(amount)
            outcome.applied.append(payload)
        return outcome

    # -- teardown --------------------------------------------------------------

    def teardown(self) -> None:
        """Drop all effects and defense pools at the end of combat."""
        self.ledger.clear_all()
        self.mitigation.reset()
        logger.debug("Combat session torn down")
