"""Exception types raised by the combat rules core."""

from __future__ import annotations


class BattleCoreError(Exception):
    """Base class for all combat rules errors."""


class LedgerError(BattleCoreError, ValueError):
    """Malformed effect application.  Recovered locally by the ledger."""


class UnknownEffectKind(LedgerError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown effect kind: {kind!r}")
        self.kind = kind


class InvalidMagnitude(LedgerError):
    def __init__(self, magnitude: object) -> None:
        super().__init__(f"Effect magnitude must be a number >= 0, got {magnitude!r}")
        self.magnitude = magnitude


class InvalidDuration(LedgerError):
    def __init__(self, duration: object) -> None:
        super().__init__(f"Effect duration must be an integer > 0, got {duration!r}")
        self.duration = duration


class InvalidTarget(LedgerError):
    def __init__(self, target: object) -> None:
        super().__init__(f"Effect target must be a str or int id, got {target!r}")
        self.target = target
