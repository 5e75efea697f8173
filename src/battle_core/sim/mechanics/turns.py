"""Turn processing -- advance effect durations and emit expiry payloads.

At the start of a target's turn every effect on it loses one turn of
duration.  Effects that run out are removed; periodic effects (damage or
heal over time) hand back an :class:`EffectPayload` describing what should
happen to the combatant.  Applying the payload is the orchestrator's job,
so the ledger never touches HP.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from battle_core.ir.status_effects import PayloadType
from battle_core.sim.core.entities import EffectInstance, TargetId
from battle_core.sim.mechanics.status_effects import StatusLedger

logger = logging.getLogger(__name__)


@dataclass
class EffectPayload:
    """Terminal payload of an expired periodic effect."""

    type: PayloadType
    value: int | float
    kind: str


@dataclass
class ExpiredEffect:
    """An effect that reached zero duration this turn."""

    kind: str
    magnitude: int | float
    source: str | None = None
    payload: EffectPayload | None = None


@dataclass
class TurnStartResult:
    """Outcome of :meth:`TurnProcessor.process_turn_start`.

    Attributes
    ----------
    expired_effects:
        Effects removed this turn, in first-application order.
    active_effects:
        Snapshots of the effects still running, with their remaining duration.
    """

    expired_effects: list[ExpiredEffect] = field(default_factory=list)
    active_effects: list[EffectInstance] = field(default_factory=list)

    @property
    def payloads(self) -> list[EffectPayload]:
        return [e.payload for e in self.expired_effects if e.payload is not None]


@dataclass
class TurnEndResult:
    """Outcome of :meth:`TurnProcessor.process_turn_end`."""

    persistent_effects: list[EffectInstance] = field(default_factory=list)


class TurnProcessor:
    """Advances effect durations on a :class:`StatusLedger`.

    Parameters
    ----------
    ledger:
        The session's ledger.  The processor holds a reference, never a copy.
    """

    def __init__(self, ledger: StatusLedger) -> None:
        self.ledger = ledger

    def process_turn_start(self, target: TargetId) -> TurnStartResult:
        """Tick every effect on *target* down by one turn.

        A target with no effects yields an empty result.
        """
        expired, active = self.ledger.tick(target)
        result = TurnStartResult(active_effects=active)

        for effect in expired:
            payload = self._payload_for(effect)
            result.expired_effects.append(
                ExpiredEffect(
                    kind=effect.kind,
                    magnitude=effect.magnitude,
                    source=effect.source,
                    payload=payload,
                )
            )
            logger.debug("%s expired on %r (payload=%s)", effect.kind, target, payload)

        return result

    def process_turn_end(self, target: TargetId) -> TurnEndResult:
        """Report the effects on *target* that carry into its next turn.

        Nothing is mutated; durations only advance at turn start.
        """
        return TurnEndResult(persistent_effects=self.ledger.list(target))

    def _payload_for(self, effect: EffectInstance) -> EffectPayload | None:
        defn = self.ledger.catalog.get(effect.kind)
        if defn is None:
            return None
        payload_type = defn.expiry_payload
        if payload_type is None:
            return None
        return EffectPayload(type=payload_type, value=effect.magnitude, kind=effect.kind)
