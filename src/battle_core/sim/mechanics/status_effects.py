"""Status ledger -- apply, stack, remove and query timed effects per target.

The ledger maps each target id to an ordered list of
:class:`EffectInstance` objects, one per effect kind.  Reapplying a kind
merges into the existing instance:

* stackable kinds add magnitude (capped at ``max_stack``) and refresh the
  duration to the latest application's value;
* non-stackable kinds replace both magnitude and duration.

Targets whose last effect is removed are pruned, so ``has(target)`` is
False exactly when the target has no active effects.

A malformed application (non str/int target, unknown kind, negative
magnitude, non-positive duration) is rejected with a logged warning and ``apply`` returns False;
it never raises, so a bad card definition cannot abort a combat turn.
"""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import Hashable, Iterable

from battle_core.ir.status_effects import EffectDefinition, EffectKind, EffectRecord, kind_id
from battle_core.sim.content.registry import EffectCatalog
from battle_core.sim.core.entities import EffectInstance, TargetId
from battle_core.sim.core.errors import (
    InvalidDuration,
    InvalidMagnitude,
    InvalidTarget,
    LedgerError,
)

logger = logging.getLogger(__name__)


@dataclass
class LedgerStats:
    """Counts of active effects across the ledger.

    Attributes
    ----------
    total_targets:
        Number of targets with at least one active effect.
    total_effects:
        Number of active effect instances.
    effects_by_kind:
        ``kind -> instance count`` for every kind in the catalog (0 if unused).
    effects_by_target:
        ``target -> instance count``.
    """

    total_targets: int = 0
    total_effects: int = 0
    effects_by_kind: dict[str, int] = field(default_factory=dict)
    effects_by_target: dict[TargetId, int] = field(default_factory=dict)


class StatusLedger:
    """Per-session collection of active effects, keyed by target id.

    Parameters
    ----------
    catalog:
        Effect metadata used to validate and merge applications.  Defaults
        to the vanilla catalog.
    """

    def __init__(self, catalog: EffectCatalog | None = None) -> None:
        self.catalog = catalog if catalog is not None else EffectCatalog.vanilla()
        self._targets: dict[TargetId, list[EffectInstance]] = {}
        self._sequence = itertools.count(1)

    # -- mutation ------------------------------------------------------------

    def apply(
        self,
        target: TargetId,
        kind: EffectKind | str,
        magnitude: int | float = 1,
        duration: int | None = None,
        source: Hashable | None = None,
    ) -> bool:
        """Apply an effect to *target*, merging with any existing instance.

        Parameters
        ----------
        target:
            Opaque combatant id, a str or int.
        kind:
            Effect kind (``EffectKind`` member or custom kind string).
        magnitude:
            Effect value, must be >= 0.
        duration:
            Turns the effect lasts, must be > 0.  Defaults to the kind's
            ``default_duration``.
        source:
            Opaque identifier of whatever applied the effect.  Stored as
            its string form.

        Returns
        -------
        bool
            True if the effect was applied, False if the application was
            rejected.
        """
        try:
            defn = self._validate(target, kind, magnitude, duration)
        except LedgerError as exc:
            logger.warning("Rejected effect application on %r: %s", target, exc)
            return False

        if duration is None:
            duration = defn.default_duration
        if source is not None:
            source = str(source)
        created_at = next(self._sequence)

        effects = self._targets.setdefault(target, [])
        existing = _find(effects, defn.kind)

        if existing is None:
            effects.append(
                EffectInstance(
                    kind=defn.kind,
                    magnitude=min(magnitude, defn.max_stack),
                    remaining_duration=duration,
                    source=source,
                    created_at=created_at,
                )
            )
        elif defn.stackable:
            existing.magnitude = min(existing.magnitude + magnitude, defn.max_stack)
            existing.remaining_duration = duration
            existing.source = source
            existing.created_at = created_at
        else:
            existing.magnitude = min(magnitude, defn.max_stack)
            existing.remaining_duration = duration
            existing.source = source
            existing.created_at = created_at

        logger.debug(
            "Applied %s (magnitude=%s, duration=%d) to %r from %r",
            defn.kind, magnitude, duration, target, source,
        )
        return True

    def remove(self, target: TargetId, kind: EffectKind | str) -> bool:
        """Remove the *kind* instance from *target*.

        Returns whether anything was removed.  An absent target is not an
        error.
        """
        effects = self._targets.get(target)
        if not effects:
            return False

        kid = kind_id(kind)
        remaining = [e for e in effects if e.kind != kid]
        if len(remaining) == len(effects):
            return False

        if remaining:
            self._targets[target] = remaining
        else:
            del self._targets[target]
        logger.debug("Removed %s from %r", kid, target)
        return True

    def clear(self, target: TargetId) -> None:
        """Drop every effect on *target*."""
        self._targets.pop(target, None)

    def clear_all(self) -> None:
        """Drop every effect on every target."""
        self._targets.clear()
        logger.debug("Cleared all status effects")

    # -- queries ---------------------------------------------------------------

    def has(self, target: TargetId) -> bool:
        """True if *target* has at least one active effect."""
        return target in self._targets

    def query(self, target: TargetId, kind: EffectKind | str) -> int | float:
        """Return the magnitude of *kind* on *target*, or 0 if absent."""
        effects = self._targets.get(target)
        if not effects:
            return 0
        instance = _find(effects, kind_id(kind))
        return instance.magnitude if instance is not None else 0

    def list(self, target: TargetId) -> list[EffectInstance]:
        """Snapshot of *target*'s effects in first-application order.

        The returned instances are copies; mutating them does not affect
        the ledger.
        """
        return [e.model_copy() for e in self._targets.get(target, [])]

    def targets(self) -> list[TargetId]:
        return list(self._targets)

    def stats(self) -> LedgerStats:
        result = LedgerStats(
            total_targets=len(self._targets),
            effects_by_kind={k: 0 for k in self.catalog.list_kinds()},
        )
        for target, effects in self._targets.items():
            result.effects_by_target[target] = len(effects)
            result.total_effects += len(effects)
            for effect in effects:
                result.effects_by_kind[effect.kind] = result.effects_by_kind.get(effect.kind, 0) + 1
        return result

    # -- persistence boundary ----------------------------------------------------

    def to_records(self) -> list[EffectRecord]:
        """Export every active effect as a plain serializable record."""
        return [
            EffectRecord(
                target=target,
                kind=e.kind,
                magnitude=e.magnitude,
                remaining_duration=e.remaining_duration,
                source=e.source,
            )
            for target, effects in self._targets.items()
            for e in effects
        ]

    def load_records(self, records: Iterable[EffectRecord]) -> int:
        """Re-apply exported records through the normal validation path.

        Returns the number of records accepted.
        """
        accepted = 0
        for record in records:
            if self.apply(
                record.target,
                record.kind,
                record.magnitude,
                record.remaining_duration,
                record.source,
            ):
                accepted += 1
        return accepted

    # -- internal ----------------------------------------------------------------

    def _validate(
        self,
        target: object,
        kind: EffectKind | str,
        magnitude: object,
        duration: object,
    ) -> EffectDefinition:
        if isinstance(target, bool) or not isinstance(target, (str, int)):
            raise InvalidTarget(target)

        defn = self.catalog.lookup(kind)

        if (
            isinstance(magnitude, bool)
            or not isinstance(magnitude, (int, float))
            or math.isnan(magnitude)
            or magnitude < 0
        ):
            raise InvalidMagnitude(magnitude)

        if duration is not None and (
            isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0
        ):
            raise InvalidDuration(duration)

        return defn

    def tick(self, target: TargetId) -> tuple[list[EffectInstance], list[EffectInstance]]:
        """Tick every effect on *target* down by one turn.

        Returns ``(expired, active)`` in first-application order.  Expired
        instances are removed from the ledger and the target is pruned if
        nothing remains.
        """
        effects = self._targets.get(target)
        if not effects:
            return [], []

        expired: list[EffectInstance] = []
        active: list[EffectInstance] = []
        for effect in effects:
            effect.remaining_duration -= 1
            if effect.remaining_duration <= 0:
                expired.append(effect)
            else:
                active.append(effect)

        if active:
            self._targets[target] = active
        else:
            del self._targets[target]
        return expired, [e.model_copy() for e in active]

    def __repr__(self) -> str:
        return f"StatusLedger(targets={len(self._targets)})"


def _find(effects: list[EffectInstance], kind: str) -> EffectInstance | None:
    for effect in effects:
        if effect.kind == kind:
            return effect
    return None
