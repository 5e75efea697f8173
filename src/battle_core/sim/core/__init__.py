"""Core primitives for the combat rules engine."""

from battle_core.sim.core.entities import (
    Combatant,
    EffectInstance,
    MitigationState,
    TargetId,
)
from battle_core.sim.core.errors import (
    BattleCoreError,
    InvalidDuration,
    InvalidMagnitude,
    InvalidTarget,
    LedgerError,
    UnknownEffectKind,
)
from battle_core.sim.core.rules import CombatRules

__all__ = [
    # entities
    "Combatant",
    "EffectInstance",
    "MitigationState",
    "TargetId",
    # errors
    "BattleCoreError",
    "LedgerError",
    "UnknownEffectKind",
    "InvalidMagnitude",
    "InvalidDuration",
    "InvalidTarget",
    # rules
    "CombatRules",
]
