"""Shared fixtures and helpers for simulation tests."""

from __future__ import annotations

import pytest

from battle_core.sim.content.registry import EffectCatalog
from battle_core.sim.mechanics.block import MitigationTracker
from battle_core.sim.mechanics.damage import DamageResolver
from battle_core.sim.mechanics.status_effects import StatusLedger
from battle_core.sim.mechanics.turns import TurnProcessor
from battle_core.sim.session import CombatSession


@pytest.fixture(scope="module")
def catalog() -> EffectCatalog:
    """Module-scoped vanilla catalog; catalogs are read-only so sharing is safe."""
    return EffectCatalog.vanilla()


@pytest.fixture
def ledger(catalog: EffectCatalog) -> StatusLedger:
    return StatusLedger(catalog)


@pytest.fixture
def turns(ledger: StatusLedger) -> TurnProcessor:
    return TurnProcessor(ledger)


@pytest.fixture
def mitigation(ledger: StatusLedger) -> MitigationTracker:
    return MitigationTracker(ledger)


@pytest.fixture
def resolver(ledger: StatusLedger, mitigation: MitigationTracker) -> DamageResolver:
    return DamageResolver(ledger, mitigation)


@pytest.fixture
def session(catalog: EffectCatalog) -> CombatSession:
    return CombatSession(catalog)
