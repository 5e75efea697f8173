"""Effect catalog -- the read-only table of effect-kind metadata.

Built-in kinds are defined in :data:`VANILLA_EFFECTS`.  Custom kinds are
added by building a new catalog with :meth:`EffectCatalog.extend`, either
from :class:`EffectDefinition` objects or from raw JSON-shaped dicts.  A
catalog is never mutated after construction, so one instance can be shared
by every session in the process.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Iterator

from battle_core.ir.status_effects import (
    EffectClass,
    EffectDefinition,
    EffectKind,
    kind_id,
)
from battle_core.sim.core.errors import UnknownEffectKind

VANILLA_EFFECTS: tuple[EffectDefinition, ...] = (
    EffectDefinition(
        kind=EffectKind.STRENGTH.value,
        name="Strength",
        description="Increases attack damage.",
        classification=EffectClass.BUFF,
    ),
    # Weak is checked on the defender by DamageResolver, so it reduces damage
    # taken rather than damage dealt.
    EffectDefinition(
        kind=EffectKind.WEAK.value,
        name="Weak",
        description="Reduces damage taken from attacks by 25%.",
        classification=EffectClass.DEBUFF,
        damage_multiplier=0.75,
    ),
    EffectDefinition(
        kind=EffectKind.VULNERABLE.value,
        name="Vulnerable",
        description="Increases damage taken from attacks by 50%.",
        classification=EffectClass.DEBUFF,
        damage_multiplier=1.5,
    ),
    EffectDefinition(
        kind=EffectKind.POISON.value,
        name="Poison",
        description="Loses HP when the effect runs out.",
        classification=EffectClass.DOT,
        default_duration=3,
    ),
    EffectDefinition(
        kind=EffectKind.REGEN.value,
        name="Regen",
        description="Heals HP when the effect runs out.",
        classification=EffectClass.HOT,
        default_duration=3,
    ),
    EffectDefinition(
        kind=EffectKind.DEXTERITY.value,
        name="Dexterity",
        description="Increases block gained.",
        classification=EffectClass.BUFF,
    ),
    EffectDefinition(
        kind=EffectKind.FOCUS.value,
        name="Focus",
        description="Reserved for orb mechanics.",
        classification=EffectClass.BUFF,
    ),
)


def parse_effect_definition(raw: dict[str, Any]) -> EffectDefinition:
    """Parse a raw JSON dict into an EffectDefinition."""
    return EffectDefinition(
        kind=raw["kind"],
        name=raw.get("name", raw["kind"]),
        description=raw.get("description", ""),
        classification=EffectClass(raw["classification"]),
        stackable=raw.get("stackable", True),
        max_stack=raw.get("max_stack", 999),
        default_duration=raw.get("default_duration", 1),
        damage_multiplier=raw.get("damage_multiplier"),
    )


class EffectCatalog:
    """Read-only lookup table from effect kind to :class:`EffectDefinition`.

    Parameters
    ----------
    definitions:
        The definitions to serve.  Kinds must be unique.
    """

    def __init__(self, definitions: Iterable[EffectDefinition]) -> None:
        table: dict[str, EffectDefinition] = {}
        for defn in definitions:
            if defn.kind in table:
                raise ValueError(f"Duplicate effect kind {defn.kind!r}")
            table[defn.kind] = defn
        self._definitions = MappingProxyType(table)

    @classmethod
    def vanilla(cls) -> EffectCatalog:
        """Catalog holding only the built-in kinds."""
        return cls(VANILLA_EFFECTS)

    # -- lookup ----------------------------------------------------------------

    def lookup(self, kind: EffectKind | str) -> EffectDefinition:
        """Return the definition for *kind*.

        Raises
        ------
        UnknownEffectKind
            If *kind* is not registered.
        """
        defn = self._definitions.get(kind_id(kind))
        if defn is None:
            raise UnknownEffectKind(kind_id(kind))
        return defn

    def get(self, kind: EffectKind | str) -> EffectDefinition | None:
        return self._definitions.get(kind_id(kind))

    def list_kinds(self) -> list[str]:
        return list(self._definitions)

    # -- extension -------------------------------------------------------------

    def extend(self, definitions: Iterable[EffectDefinition | dict[str, Any]]) -> EffectCatalog:
        """Return a new catalog with *definitions* added to this one's.

        Raw dicts are parsed with :func:`parse_effect_definition`.  Redefining
        an existing kind raises ``ValueError``.
        """
        extra = [
            d if isinstance(d, EffectDefinition) else parse_effect_definition(d)
            for d in definitions
        ]
        return EffectCatalog([*self._definitions.values(), *extra])

    # -- dunder helpers --------------------------------------------------------

    def __contains__(self, kind: object) -> bool:
        if not isinstance(kind, str):
            return False
        return kind_id(kind) in self._definitions

    def __iter__(self) -> Iterator[EffectDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"EffectCatalog(kinds={self.list_kinds()!r})"
