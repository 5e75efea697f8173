"""Core combat mechanics for the rules engine.

Re-exports the primary classes from each mechanics module for convenience.

Usage::

    from battle_core.sim.mechanics import (
        StatusLedger, TurnProcessor, MitigationTracker, DamageResolver,
    )
"""

# -- status effects ----------------------------------------------------------
from .status_effects import LedgerStats, StatusLedger

# -- turns -------------------------------------------------------------------
from .turns import (
    EffectPayload,
    ExpiredEffect,
    TurnEndResult,
    TurnProcessor,
    TurnStartResult,
)

# -- block -------------------------------------------------------------------
from .block import BlockBreakdown, MitigationTracker

# -- damage ------------------------------------------------------------------
from .damage import DamageBreakdown, DamageResolver, DamageResult

__all__ = [
    # status effects
    "StatusLedger",
    "LedgerStats",
    # turns
    "TurnProcessor",
    "TurnStartResult",
    "TurnEndResult",
    "ExpiredEffect",
    "EffectPayload",
    # block
    "MitigationTracker",
    "BlockBreakdown",
    # damage
    "DamageResolver",
    "DamageResult",
    "DamageBreakdown",
]
