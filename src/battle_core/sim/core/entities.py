"""Entity models for the combat rules core.

All data classes use Pydantic v2 BaseModel for validation and
serialization.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

TargetId = str | int
"""Opaque combatant identity used to key ledgers and mitigation pools.
Restricted to str and int so ledger contents always export as records."""


# ---------------------------------------------------------------------------
# EffectInstance
# ---------------------------------------------------------------------------

class EffectInstance(BaseModel):
    """One active effect on one target.  Owned by the ledger entry for that target."""

    kind: str
    magnitude: int | float = Field(ge=0)
    remaining_duration: int
    source: str | None = None
    """Identifier of whatever applied the effect, normalised to a string."""
    created_at: int = 0
    """Ledger sequence number of the most recent application."""


# ---------------------------------------------------------------------------
# MitigationState
# ---------------------------------------------------------------------------

class MitigationState(BaseModel):
    """Defense pools for one combatant.

    ``block`` is ephemeral and reset at the end of the owner's turn.
    ``armor`` persists across the whole combat until consumed by damage.
    """

    block: int = Field(default=0, ge=0)
    armor: int = Field(default=0, ge=0)

    def absorb(self, amount: int) -> tuple[int, int, int]:
        """Consume *amount* damage from block, then armor.

        Returns ``(block_consumed, armor_consumed, remaining)``.
        """
        if amount <= 0:
            return 0, 0, 0

        block_consumed = min(self.block, amount)
        self.block -= block_consumed
        remaining = amount - block_consumed

        armor_consumed = min(self.armor, remaining)
        self.armor -= armor_consumed
        remaining -= armor_consumed
        return block_consumed, armor_consumed, remaining


# ---------------------------------------------------------------------------
# Combatant
# ---------------------------------------------------------------------------

class Combatant(BaseModel):
    """Anything with HP that takes part in combat.

    The rules core only addresses combatants by ``id``; HP is mutated by
    the orchestrator using the resolver's outputs.
    """

    id: str
    name: str
    max_hp: int
    hp: int

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0

    def lose_hp(self, amount: int) -> int:
        """Remove up to *amount* HP.  Returns the HP actually lost."""
        if amount <= 0:
            return 0
        hp_lost = min(self.hp, amount)
        self.hp -= hp_lost
        return hp_lost

    def heal(self, amount: int) -> int:
        """Heal *amount* HP, capped at ``max_hp``.  Returns the HP restored."""
        if amount <= 0:
            return 0
        restored = max(0, min(self.max_hp - self.hp, amount))
        self.hp += restored
        return restored
