"""
Game-system detection for actor records.

The ``system`` block of an actor differs completely between rule families.
Rather than probing optional fields in every consumer, the raw block is
decoded once into a closed set of variants:

- WfrpSystem: characteristic/wound family (Warhammer Fantasy Roleplay 4e).
  Recognised by ``characteristics`` or ``status.wounds``.
- DndSystem: class/level family (D&D 5e, Pathfinder 2e). Every field is
  optional, so minimal or ambiguous records land here.
- UnrecognizedSystem: the block is not a mapping or fits neither schema.

Leaf values are coerced leniently (numeric strings become numbers, junk
becomes None) so that one odd field never changes the detected family.
"""

import math
from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, ClassVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    model_validator,
)


class GameFamily(str, Enum):
    """Rule families the summarizer understands."""

    WFRP = "wfrp4e"
    DND = "dnd5e"


# ---------------------------------------------------------------------------
# Lenient field coercion
# ---------------------------------------------------------------------------

def is_set(value: Any) -> bool:
    """
    Presence test for host JSON values.

    Containers count as present even when empty; scalars use normal
    truthiness (None, False, 0 and "" are absent).
    """
    if isinstance(value, (Mapping, list)):
        return True
    return bool(value)


def _as_block(value: Any) -> Any:
    """Absent values become None; present non-mappings become an empty block."""
    if not is_set(value):
        return None
    return value if isinstance(value, Mapping) else {}


def _as_entries(value: Any) -> dict[str, Any] | None:
    """Normalise a mapping- or list-shaped section into ordered mapping entries."""
    if not is_set(value):
        return None
    if isinstance(value, Mapping):
        pairs = value.items()
    elif isinstance(value, list):
        pairs = ((str(index), entry) for index, entry in enumerate(value))
    else:
        return {}
    return {str(key): entry for key, entry in pairs if isinstance(entry, Mapping)}


def _as_number(value: Any) -> int | float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    # json.loads accepts NaN and Infinity literals
    if not math.isfinite(number):
        return None
    if isinstance(value, float):
        return value
    return int(number) if number.is_integer() else number


def _as_text(value: Any) -> str:
    # Rich-text fields are sometimes wrapped as {"value": "<p>...</p>"}
    if isinstance(value, Mapping):
        value = value.get("value")
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_characteristic_key(value: Any) -> str:
    if isinstance(value, Mapping):
        return _as_text(value.get("key"))
    return _as_text(value)


Number = Annotated[int | float | None, BeforeValidator(_as_number)]
Text = Annotated[str, BeforeValidator(_as_text)]
AsBlock = BeforeValidator(_as_block)
AsEntries = BeforeValidator(_as_entries)


class _Block(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


# ---------------------------------------------------------------------------
# Characteristic/wound family (WFRP 4e)
# ---------------------------------------------------------------------------

class Characteristic(_Block):
    initial: Number = None
    advances: Number = None
    value: Number = None


class Wounds(_Block):
    value: Any = None
    max: Any = None


class Armour(_Block):
    value: Number = None
    head: Number = None


class WfrpStatus(_Block):
    wounds: Annotated[Wounds | None, AsBlock] = None
    armour: Annotated[Armour | None, AsBlock] = None


class DetailValue(_Block):
    value: Any = None


class WfrpDetails(_Block):
    species: Annotated[DetailValue | None, AsBlock] = None
    career: Annotated[DetailValue | None, AsBlock] = None
    status: Annotated[DetailValue | None, AsBlock] = None


class WfrpSkill(_Block):
    name: Text = ""
    characteristic: Annotated[str, BeforeValidator(_as_characteristic_key)] = ""
    advances: Number = None
    total: Number = None
    value: Number = None


class WfrpTalent(_Block):
    name: Text = ""
    advances: Number = None
    description: Text = ""


class WfrpSystem(_Block):
    """Decoded ``system`` block of a characteristic/wound family actor."""

    family: ClassVar[GameFamily] = GameFamily.WFRP

    characteristics: Annotated[dict[str, Characteristic] | None, AsEntries] = None
    status: Annotated[WfrpStatus | None, AsBlock] = None
    details: Annotated[WfrpDetails | None, AsBlock] = None
    skills: Annotated[dict[str, WfrpSkill] | None, AsEntries] = None
    talents: Annotated[dict[str, WfrpTalent] | None, AsEntries] = None

    @model_validator(mode="before")
    @classmethod
    def _require_marker(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        status = data.get("status")
        wounds = status.get("wounds") if isinstance(status, Mapping) else None
        if not (is_set(data.get("characteristics")) or is_set(wounds)):
            raise ValueError("neither characteristics nor status.wounds present")
        return data


# ---------------------------------------------------------------------------
# Class/level family (D&D 5e, PF2e)
# ---------------------------------------------------------------------------

class HitPoints(_Block):
    value: Any = None
    max: Any = None
    temp: Any = None


class ArmorClass(_Block):
    value: Any = None


class DndAttributes(_Block):
    hp: Annotated[HitPoints | None, AsBlock] = None
    ac: Annotated[ArmorClass | None, AsBlock] = None


class LevelValue(_Block):
    value: Any = None


class DndDetails(_Block):
    level: Annotated[LevelValue | None, AsBlock] = None
    class_: Any = Field(None, alias="class")
    race: Any = None
    ancestry: Any = None


class Ability(_Block):
    value: Number = None
    mod: Number = None


class DndSkill(_Block):
    value: Number = None
    proficient: Any = None
    ability: Any = None


class Save(_Block):
    value: Number = None
    proficient: Any = None


class DndSystem(_Block):
    """Decoded ``system`` block of a class/level family actor."""

    family: ClassVar[GameFamily] = GameFamily.DND

    attributes: Annotated[DndAttributes | None, AsBlock] = None
    details: Annotated[DndDetails | None, AsBlock] = None
    level: Any = None
    abilities: Annotated[dict[str, Ability] | None, AsEntries] = None
    skills: Annotated[dict[str, DndSkill] | None, AsEntries] = None
    saves: Annotated[dict[str, Save] | None, AsEntries] = None


class UnrecognizedSystem(_Block):
    """A ``system`` block that fits neither rule family."""

    family: ClassVar[GameFamily | None] = None

    reason: str = ""


DecodedSystem = WfrpSystem | DndSystem | UnrecognizedSystem


def decode_system(system: Any) -> DecodedSystem:
    """
    Decode a raw ``system`` block into its rule-family variant.

    The characteristic/wound schema is tried first, then the class/level
    schema. A missing block decodes as an empty class/level system.
    """
    if system is None:
        system = {}
    if not isinstance(system, Mapping):
        return UnrecognizedSystem(
            reason=f"system block is {type(system).__name__}, not a mapping"
        )

    failures = []
    for schema in (WfrpSystem, DndSystem):
        try:
            return schema.model_validate(dict(system))
        except ValidationError as e:
            failures.append(f"{schema.__name__}: {e.error_count()} error(s)")
    return UnrecognizedSystem(reason="; ".join(failures))


def detect_family(system: Any) -> GameFamily:
    """
    Classify a raw ``system`` block.

    Anything that is not a characteristic/wound system is treated as the
    class/level family.
    """
    decoded = decode_system(system)
    if isinstance(decoded, WfrpSystem):
        return GameFamily.WFRP
    return GameFamily.DND
