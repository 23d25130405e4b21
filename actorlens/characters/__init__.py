"""
Character summarization.

Decodes raw actor records from the tabletop host and reduces them to
compact summaries:

    ActorRecord → decode_system() → WfrpSystem | DndSystem | UnrecognizedSystem
                        ↓
                   summarize() → CharacterSummary
"""

from actorlens.characters.families import (
    DecodedSystem,
    DndSystem,
    GameFamily,
    UnrecognizedSystem,
    WfrpSystem,
    decode_system,
    detect_family,
)
from actorlens.characters.records import ActorRecord, EffectRecord, ItemRecord
from actorlens.characters.results import (
    CharacterLookupError,
    CharacterToolError,
    CharacterValidationError,
    Failure,
    Result,
    Success,
)
from actorlens.characters.summary import (
    CharacterList,
    CharacterListing,
    CharacterSummary,
    EffectSummary,
    ItemSummary,
    extract_basic_info,
    extract_stats,
    format_effects,
    format_items,
    summarize,
    truncate,
)

__all__ = [
    "ActorRecord",
    "CharacterList",
    "CharacterListing",
    "CharacterLookupError",
    "CharacterSummary",
    "CharacterToolError",
    "CharacterValidationError",
    "DecodedSystem",
    "DndSystem",
    "EffectRecord",
    "EffectSummary",
    "Failure",
    "GameFamily",
    "ItemRecord",
    "ItemSummary",
    "Result",
    "Success",
    "UnrecognizedSystem",
    "WfrpSystem",
    "decode_system",
    "detect_family",
    "extract_basic_info",
    "extract_stats",
    "format_effects",
    "format_items",
    "summarize",
    "truncate",
]
