"""Tunable rules for one combat session."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CombatRules(BaseModel):
    """Session-wide rule switches.

    The defaults reproduce the canonical pipeline, where damage never drops
    below 0.  ``damage_floor=1`` guarantees chip damage: every resolved hit
    deals at least 1, including zero and negative results.
    """

    model_config = ConfigDict(frozen=True)

    damage_floor: int = Field(default=0, ge=0, le=1)

    strict_block_reset: bool = True
    """When True, a second ``clear_block`` for the same owner and turn number
    is ignored with a warning."""
