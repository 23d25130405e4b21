"""
Character summaries built from raw actor records.

``summarize()`` decodes the record's game system once and threads the
decoded variant through both ``extract_basic_info()`` and
``extract_stats()``, so the two never disagree about the rule family.

Output models serialize with camelCase keys (``model_dump(by_alias=True)``)
because the summaries are handed to JSON clients.
"""

import math
from typing import Any

from pydantic import BaseModel, Field

from actorlens.characters.families import (
    DecodedSystem,
    DndSystem,
    UnrecognizedSystem,
    WfrpSystem,
    decode_system,
)
from actorlens.characters.records import ActorHeader, ActorRecord, EffectRecord, ItemRecord

MAX_ITEMS = 20
ITEM_DESCRIPTION_LENGTH = 200
TALENT_DESCRIPTION_LENGTH = 100
ELLIPSIS = "..."

CHARACTERISTIC_NAMES = {
    "ws": "Weapon Skill",
    "bs": "Ballistic Skill",
    "s": "Strength",
    "t": "Toughness",
    "i": "Initiative",
    "ag": "Agility",
    "dex": "Dexterity",
    "int": "Intelligence",
    "wp": "Willpower",
    "fel": "Fellowship",
}


# ---------------------------------------------------------------------------
# Output models
# ---------------------------------------------------------------------------

class ItemSummary(BaseModel):
    """Compact view of an embedded item."""

    id: str | None = None
    name: str | None = None
    type: str | None = None
    quantity: Any = 1
    description: str = ""
    has_image: bool = Field(False, serialization_alias="hasImage")


class EffectDuration(BaseModel):
    type: Any = None
    remaining: Any = None


class EffectSummary(BaseModel):
    """Compact view of an active effect."""

    id: str | None = None
    name: str | None = None
    disabled: Any = None
    duration: EffectDuration | None = None
    has_icon: bool = Field(False, serialization_alias="hasIcon")


class CharacterSummary(BaseModel):
    """Client-facing summary of a single actor."""

    id: str | None = None
    name: str | None = None
    type: str | None = None
    basic_info: dict[str, Any] = Field(default_factory=dict, serialization_alias="basicInfo")
    stats: dict[str, Any] = Field(default_factory=dict)
    items: list[ItemSummary] = Field(default_factory=list, max_length=MAX_ITEMS)
    effects: list[EffectSummary] = Field(default_factory=list)
    has_image: bool = Field(False, serialization_alias="hasImage")


class CharacterListing(BaseModel):
    """Light per-actor projection used by list-characters."""

    id: str | None = None
    name: str | None = None
    type: str | None = None
    has_image: bool = Field(False, serialization_alias="hasImage")

    @classmethod
    def from_record(cls, record: ActorHeader) -> "CharacterListing":
        return cls(
            id=record.id,
            name=record.name,
            type=record.type,
            has_image=record.has_image,
        )


class CharacterList(BaseModel):
    characters: list[CharacterListing] = Field(default_factory=list)
    total: int = 0
    filtered: str = "All characters"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def truncate(text: str, max_length: int) -> str:
    """
    Shorten text to at most max_length characters.

    Text that fits is returned unchanged. Longer text keeps its first
    ``max_length - 3`` characters followed by "...", so the result is
    exactly max_length long.
    """
    if not text or len(text) <= max_length:
        return text
    if max_length < len(ELLIPSIS):
        return text[:max_length]
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def _bonus(value: int | float | None) -> int:
    """Tens digit of a percentile characteristic."""
    return math.floor((value or 0) / 10)


def _decoded(source: ActorRecord | DecodedSystem) -> DecodedSystem:
    if isinstance(source, ActorRecord):
        return decode_system(source.system)
    return source


# ---------------------------------------------------------------------------
# Basic info
# ---------------------------------------------------------------------------

def _wfrp_basic_info(system: WfrpSystem) -> dict[str, Any]:
    info: dict[str, Any] = {}
    status = system.status

    if status and status.wounds:
        info["wounds"] = {
            "current": status.wounds.value,
            "max": status.wounds.max,
        }

    toughness = (system.characteristics or {}).get("t")
    if toughness is not None:
        bonus = _bonus(toughness.value)
        # Body armour first, head location as a fallback
        armour = status.armour if status else None
        armor_points = (armour.value or armour.head or 0) if armour else 0
        info["toughness"] = {
            "bonus": bonus,
            "armorPoints": armor_points,
            "total": bonus + armor_points,
        }

    details = system.details
    if details:
        for field in ("species", "career", "status"):
            detail = getattr(details, field)
            if detail and detail.value:
                info[field] = detail.value

    return info


def _dnd_basic_info(system: DndSystem) -> dict[str, Any]:
    info: dict[str, Any] = {}

    attributes = system.attributes
    if attributes:
        if attributes.hp:
            info["hitPoints"] = {
                "current": attributes.hp.value,
                "max": attributes.hp.max,
                "temp": attributes.hp.temp or 0,
            }
        if attributes.ac:
            info["armorClass"] = attributes.ac.value

    details = system.details
    if details and details.level and details.level.value:
        info["level"] = details.level.value
    elif system.level:
        info["level"] = system.level

    if details:
        if details.class_:
            info["class"] = details.class_
        if details.race:
            info["race"] = details.race
        elif details.ancestry:
            info["race"] = details.ancestry

    return info


def extract_basic_info(source: ActorRecord | DecodedSystem) -> dict[str, Any]:
    """
    Headline numbers for an actor: wounds and toughness for WFRP,
    hit points, armour class, level, class and race for D&D-like systems.

    Fields whose source data is missing are left out.
    """
    system = _decoded(source)
    if isinstance(system, WfrpSystem):
        return _wfrp_basic_info(system)
    if isinstance(system, DndSystem):
        return _dnd_basic_info(system)
    return {}


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------

def _wfrp_stats(system: WfrpSystem) -> dict[str, Any]:
    stats: dict[str, Any] = {}

    if system.characteristics is not None:
        stats["characteristics"] = {}
        for key, characteristic in system.characteristics.items():
            value = characteristic.value or characteristic.initial or 0
            stats["characteristics"][key.upper()] = {
                "name": CHARACTERISTIC_NAMES.get(key, key.upper()),
                "initial": characteristic.initial or 0,
                "advances": characteristic.advances or 0,
                "value": value,
                "bonus": _bonus(value),
            }

    if system.skills is not None:
        stats["skills"] = {}
        for skill in system.skills.values():
            if not skill.name:
                continue
            stats["skills"][skill.name] = {
                "characteristic": skill.characteristic,
                "advances": skill.advances or 0,
                "value": skill.total or skill.value or 0,
            }

    if system.talents is not None:
        stats["talents"] = [
            {
                "name": talent.name,
                "advances": talent.advances or 1,
                "description": truncate(talent.description, TALENT_DESCRIPTION_LENGTH),
            }
            for talent in system.talents.values()
            if talent.name
        ]

    return stats


def _dnd_stats(system: DndSystem) -> dict[str, Any]:
    stats: dict[str, Any] = {}

    if system.abilities is not None:
        stats["abilities"] = {
            key: {"score": ability.value or 10, "modifier": ability.mod or 0}
            for key, ability in system.abilities.items()
        }

    if system.skills is not None:
        stats["skills"] = {
            key: {
                "value": skill.value or 0,
                "proficient": skill.proficient or False,
                "ability": skill.ability or "",
            }
            for key, skill in system.skills.items()
        }

    if system.saves is not None:
        stats["saves"] = {
            key: {"value": save.value or 0, "proficient": save.proficient or False}
            for key, save in system.saves.items()
        }

    return stats


def extract_stats(source: ActorRecord | DecodedSystem) -> dict[str, Any]:
    """
    Detailed statistics for an actor.

    WFRP: characteristics (keyed by upper-case abbreviation), named skills
    and talents. D&D-like: abilities, skills and saves. Entries keep the
    order the host sent them in.
    """
    system = _decoded(source)
    if isinstance(system, WfrpSystem):
        return _wfrp_stats(system)
    if isinstance(system, DndSystem):
        return _dnd_stats(system)
    return {}


# ---------------------------------------------------------------------------
# Items and effects
# ---------------------------------------------------------------------------

def format_items(items: list[ItemRecord]) -> list[ItemSummary]:
    """Summaries of the first MAX_ITEMS items, in input order."""
    summaries = []
    for item in items[:MAX_ITEMS]:
        description = item.system.get("description")
        text = description.get("value") if isinstance(description, dict) else None
        summaries.append(
            ItemSummary(
                id=item.id,
                name=item.name,
                type=item.type,
                quantity=item.system.get("quantity") or 1,
                description=truncate(text if isinstance(text, str) else "", ITEM_DESCRIPTION_LENGTH),
                has_image=bool(item.img),
            )
        )
    return summaries


def format_effects(effects: list[EffectRecord]) -> list[EffectSummary]:
    return [
        EffectSummary(
            id=effect.id,
            name=effect.name,
            disabled=effect.disabled,
            duration=(
                EffectDuration(
                    type=effect.duration.type,
                    remaining=effect.duration.remaining,
                )
                if effect.duration is not None
                else None
            ),
            has_icon=bool(effect.icon),
        )
        for effect in effects
    ]


def summarize(record: ActorRecord) -> CharacterSummary:
    """Build the full summary for one actor record."""
    system = decode_system(record.system)
    return CharacterSummary(
        id=record.id,
        name=record.name,
        type=record.type,
        basic_info=extract_basic_info(system),
        stats=extract_stats(system),
        items=format_items(record.items),
        effects=format_effects(record.effects),
        has_image=record.has_image,
    )
