"""Definition schema for combat rules content.

Effect kinds and their static metadata are represented as Pydantic models
that serialise cleanly to/from JSON, so custom kinds can be authored as data.
"""

from .status_effects import (
    EXPIRY_PAYLOADS,
    EffectClass,
    EffectDefinition,
    EffectKind,
    EffectRecord,
    PayloadType,
    kind_id,
)

__all__ = [
    "EXPIRY_PAYLOADS",
    "EffectClass",
    "EffectDefinition",
    "EffectKind",
    "EffectRecord",
    "PayloadType",
    "kind_id",
]
