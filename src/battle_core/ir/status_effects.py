"""Status effect definitions -- buffs, debuffs and periodic effects applied to combatants."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EffectKind(str, Enum):
    """Built-in effect kinds.  Custom kinds are plain strings."""

    STRENGTH = "strength"
    WEAK = "weak"
    VULNERABLE = "vulnerable"
    POISON = "poison"
    REGEN = "regen"
    DEXTERITY = "dexterity"
    FOCUS = "focus"


class EffectClass(str, Enum):
    """How an effect is classified for display and expiry handling."""

    BUFF = "buff"
    DEBUFF = "debuff"

    DOT = "dot"
    """Damage over time -- deals its magnitude as damage when it expires."""

    HOT = "hot"
    """Heal over time -- heals its magnitude when it expires."""


class PayloadType(str, Enum):
    """Kind of terminal payload an expiring effect hands to the orchestrator."""

    DAMAGE = "damage"
    HEAL = "heal"


# Exhaustive classification -> expiry payload table.  Every EffectClass must
# have an entry; ``None`` means the effect expires silently.
EXPIRY_PAYLOADS: dict[EffectClass, PayloadType | None] = {
    EffectClass.BUFF: None,
    EffectClass.DEBUFF: None,
    EffectClass.DOT: PayloadType.DAMAGE,
    EffectClass.HOT: PayloadType.HEAL,
}

_missing = set(EffectClass) - set(EXPIRY_PAYLOADS)
if _missing:
    raise RuntimeError(f"EXPIRY_PAYLOADS has no handler for {sorted(c.value for c in _missing)}")


def kind_id(kind: EffectKind | str) -> str:
    """Normalise an effect kind to its string identifier."""
    if isinstance(kind, EffectKind):
        return kind.value
    return str(kind)


class EffectDefinition(BaseModel):
    """Static, read-only metadata for one effect kind."""

    model_config = ConfigDict(frozen=True)

    kind: str
    """Unique identifier (e.g. ``"poison"`` or ``"my_mod:burning"``)."""

    name: str
    """Display name."""

    description: str = ""

    classification: EffectClass

    stackable: bool = True
    """If True, reapplication adds magnitude (capped at ``max_stack``).
    Otherwise reapplication replaces magnitude outright."""

    max_stack: int = Field(default=999, ge=1)

    default_duration: int = Field(default=1, ge=1)
    """Duration used when an application does not specify one."""

    damage_multiplier: float | None = Field(default=None, gt=0)
    """Multiplier applied to damage received by a holder of this effect
    (0.75 for Weak, 1.5 for Vulnerable).  ``None`` for effects that do not
    scale incoming damage."""

    @property
    def expiry_payload(self) -> PayloadType | None:
        return EXPIRY_PAYLOADS[self.classification]


class EffectRecord(BaseModel):
    """Plain serializable snapshot of one active effect, for save/load collaborators."""

    target: str | int
    kind: str
    magnitude: int | float = Field(ge=0)
    remaining_duration: int = Field(ge=1)
    source: str | None = None
