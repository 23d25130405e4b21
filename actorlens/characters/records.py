"""
Raw actor records as returned by the virtual-tabletop bridge.

These models are lenient: the host sends loosely typed JSON
whose shape depends on the active game system, so unknown fields are
ignored and missing sequences default to empty. The game-system specific
``system`` block is kept raw here and decoded separately by
:mod:`actorlens.characters.families`.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _mapping_entries(value: Any) -> list[Any]:
    """Keep only mapping entries of a sequence (None becomes empty)."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"expected a list, got {type(value).__name__}")
    return [entry for entry in value if isinstance(entry, Mapping)]


class ItemRecord(BaseModel):
    """An embedded item (weapon, armour, spell, trapping...) on an actor."""

    id: str | None = None
    name: str | None = None
    type: str | None = None
    img: str | None = None
    system: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("system", mode="before")
    @classmethod
    def _system_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, Mapping) else {}


class EffectDurationRecord(BaseModel):
    """Duration block of an active effect."""

    type: Any = None
    remaining: Any = None

    model_config = ConfigDict(extra="ignore", frozen=True)


class EffectRecord(BaseModel):
    """An active effect (condition, buff, injury...) applied to an actor."""

    id: str | None = None
    name: str | None = None
    disabled: Any = None
    duration: EffectDurationRecord | None = None
    icon: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("duration", mode="before")
    @classmethod
    def _duration_block(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return value
        return {} if value else None


class ActorHeader(BaseModel):
    """Identity fields of an actor, enough for a listing."""

    id: str | None = Field(None, description="Document id on the host")
    name: str | None = Field(None, description="Actor display name")
    type: str | None = Field(None, description='Actor type, e.g. "character" or "npc"')
    img: str | None = Field(None, description="Avatar image path, if any")

    model_config = ConfigDict(extra="ignore", frozen=True)

    @property
    def has_image(self) -> bool:
        return bool(self.img)


class ActorRecord(ActorHeader):
    """
    A single actor (character, NPC, creature) from the tabletop host.

    Example:
        >>> record = ActorRecord.model_validate({
        ...     "id": "a1",
        ...     "name": "Grom",
        ...     "type": "character",
        ...     "system": {"status": {"wounds": {"value": 10, "max": 12}}},
        ... })
        >>> record.has_image
        False
    """

    system: Any = Field(
        default_factory=dict,
        description="Game-system specific data; shape depends on the rule family",
    )
    items: list[ItemRecord] = Field(default_factory=list)
    effects: list[EffectRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("items", "effects", mode="before")
    @classmethod
    def _sequences(cls, value: Any) -> list[Any]:
        return _mapping_entries(value)

    @field_validator("system", mode="before")
    @classmethod
    def _system_default(cls, value: Any) -> Any:
        return {} if value is None else value
