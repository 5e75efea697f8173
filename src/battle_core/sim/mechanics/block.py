"""Block and armor mechanics -- gain, clear, and query defense pools."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from battle_core.ir.status_effects import EffectKind
from battle_core.sim.core.entities import MitigationState, TargetId
from battle_core.sim.core.rules import CombatRules
from battle_core.sim.mechanics.status_effects import StatusLedger

logger = logging.getLogger(__name__)


@dataclass
class BlockBreakdown:
    base_block: int
    final_block: int
    bonus: int


class MitigationTracker:
    """Owns the :class:`MitigationState` of every combatant in one session.

    Block and armor are only ever written here and by the damage resolver.

    Parameters
    ----------
    ledger:
        Consulted for the Dexterity bonus on block gain.
    rules:
        Session rules; ``strict_block_reset`` enables the once-per-turn guard.
    """

    def __init__(self, ledger: StatusLedger, rules: CombatRules | None = None) -> None:
        self.ledger = ledger
        self.rules = rules or CombatRules()
        self._states: dict[TargetId, MitigationState] = {}
        self._last_cleared_turn: dict[TargetId, int] = {}

    def state(self, target: TargetId) -> MitigationState:
        """Return *target*'s pools, creating empty ones on first use."""
        if target not in self._states:
            self._states[target] = MitigationState()
        return self._states[target]

    def block(self, target: TargetId) -> int:
        return self.state(target).block

    def armor(self, target: TargetId) -> int:
        return self.state(target).armor

    # -- block -----------------------------------------------------------------

    def calculate_block(self, target: TargetId, base_block: int) -> BlockBreakdown:
        """Block *target* would gain from *base_block*, without applying it."""
        if base_block < 0:
            raise ValueError(f"base_block must be >= 0, got {base_block}")
        bonus = int(self.ledger.query(target, EffectKind.DEXTERITY))
        return BlockBreakdown(base_block=base_block, final_block=base_block + bonus, bonus=bonus)

    def add_block(self, target: TargetId, base_block: int) -> int:
        """Add *base_block* plus the Dexterity bonus to *target*'s block.

        Returns the block actually added.
        """
        breakdown = self.calculate_block(target, base_block)
        self.state(target).block += breakdown.final_block
        logger.debug(
            "%r gains %d block (%d base + %d dexterity)",
            target, breakdown.final_block, base_block, breakdown.bonus,
        )
        return breakdown.final_block

    def clear_block(self, target: TargetId, turn: int | None = None) -> None:
        """Reset *target*'s block to 0.

        Call once, at the end of *target*'s own turn.  When *turn* is given
        and strict resets are on, a second clear for the same target and
        turn is ignored.  Armor is never touched.
        """
        if turn is not None and self.rules.strict_block_reset:
            if self._last_cleared_turn.get(target) == turn:
                logger.warning("Block of %r already cleared for turn %d; ignoring", target, turn)
                return
            self._last_cleared_turn[target] = turn

        state = self._states.get(target)
        if state is not None:
            state.block = 0

    # -- armor -----------------------------------------------------------------

    def add_armor(self, target: TargetId, amount: int) -> int:
        """Add persistent armor to *target*.  Returns the new armor total."""
        if amount < 0:
            raise ValueError(f"armor amount must be >= 0, got {amount}")
        state = self.state(target)
        state.armor += amount
        logger.debug("%r gains %d armor (total %d)", target, amount, state.armor)
        return state.armor

    # -- teardown --------------------------------------------------------------

    def reset(self) -> None:
        """Forget every combatant's pools."""
        self._states.clear()
        self._last_cleared_turn.clear()
