"""
Character lookup tools.

Two tools backed by the tabletop bridge:

- get-character: full summary of one actor (stats, items, effects),
  for both WFRP 4e and D&D 5e style systems.
- list-characters: light listing of all actors, optionally by type.

Data flow:
    tool arguments → validate → QueryClient.query() → decode record
                                                         ↓
                              CharacterSummary / CharacterList → JSON dict

Each step returns a Success or Failure (see actorlens.characters.results).
``lookup_character()`` and ``list_characters()`` hand that result to the
caller; ``call()`` unwraps it for dispatchers that expect exceptions.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from actorlens.bridge.base import QueryClient
from actorlens.characters.records import ActorHeader, ActorRecord
from actorlens.characters.results import (
    CharacterLookupError,
    CharacterValidationError,
    Failure,
    Result,
    Success,
    describe_cause,
)
from actorlens.characters.summary import (
    CharacterList,
    CharacterListing,
    CharacterSummary,
    summarize,
)
from actorlens.tools.base import ToolAdapter

logger = logging.getLogger(__name__)

GET_CHARACTER = "get-character"
LIST_CHARACTERS = "list-characters"

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": GET_CHARACTER,
        "description": (
            "Retrieve detailed information about a specific character by name or ID. "
            "Supports both D&D 5e (abilities, HP, AC, skills) and WFRP 4e "
            "(characteristics, wounds, toughness, skills) systems."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "identifier": {
                    "type": "string",
                    "description": "Character name or ID to look up",
                },
            },
            "required": ["identifier"],
        },
    },
    {
        "name": LIST_CHARACTERS,
        "description": (
            "List all available characters with basic information. "
            "Works with both D&D 5e and WFRP 4e character data."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "type": {
                    "type": "string",
                    "description": 'Optional filter by character type (e.g., "character", "npc")',
                },
            },
        },
    },
]


class GetCharacterArgs(BaseModel):
    identifier: str

    model_config = ConfigDict(extra="ignore")

    @field_validator("identifier")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Character identifier cannot be empty")
        return value


class ListCharactersArgs(BaseModel):
    type: str | None = None

    model_config = ConfigDict(extra="ignore")


def _validate(model: type[BaseModel], tool_name: str, arguments: Any) -> Result:
    try:
        return Success(model.model_validate(arguments if arguments is not None else {}))
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'arguments'}: {error['msg']}"
            for error in e.errors()
        )
        error = CharacterValidationError(f"Invalid arguments for {tool_name}: {details}", cause=e)
        logger.warning(str(error))
        return Failure(error)


def _host_error(response: Any) -> str | None:
    """Error message of a ``{"error": ..., "success": false}`` bridge payload."""
    if isinstance(response, Mapping) and response.get("success") is False:
        return str(response.get("error") or "Unknown error")
    return None


class CharacterTools(ToolAdapter):
    """
    Tool adapter serving character data from the tabletop host.

    Args:
        query_client: Collaborator that runs bridge queries. Its lifecycle
                      is driven by this adapter's initialize()/shutdown().
    """

    def __init__(self, query_client: QueryClient):
        self._client = query_client

    async def initialize(self) -> None:
        await self._client.initialize()

    async def shutdown(self) -> None:
        await self._client.shutdown()

    async def list_tools(self) -> list[dict[str, Any]]:
        return [dict(tool) for tool in TOOL_DEFINITIONS]

    async def call(self, tool_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Dispatch a tool call and return the JSON-ready result."""
        if tool_name == GET_CHARACTER:
            args = _validate(GetCharacterArgs, tool_name, arguments)
            result = await self.lookup_character(args.value.identifier) if args.ok else args
        elif tool_name == LIST_CHARACTERS:
            args = _validate(ListCharactersArgs, tool_name, arguments)
            result = await self.list_characters(args.value.type) if args.ok else args
        else:
            raise ValueError(f"Unknown tool: {tool_name!r}")

        return result.unwrap().model_dump(by_alias=True)

    async def _query(self, operation_name: str, params: dict[str, Any], failure_prefix: str) -> Result:
        try:
            response = await self._client.query(operation_name, params)
        except Exception as e:
            return Failure(
                CharacterLookupError(f"{failure_prefix}: {describe_cause(e)}", cause=e)
            )

        host_error = _host_error(response)
        if host_error is not None:
            return Failure(CharacterLookupError(f"{failure_prefix}: {host_error}"))
        return Success(response)

    async def lookup_character(self, identifier: str) -> Result[CharacterSummary]:
        """
        Fetch one actor by name or id and summarize it.

        Returns:
            Success(CharacterSummary), or Failure carrying a
            CharacterValidationError (empty identifier, nothing queried)
            or a CharacterLookupError (query failed, no usable record).
        """
        args = _validate(GetCharacterArgs, GET_CHARACTER, {"identifier": identifier})
        if not args.ok:
            return args

        logger.info(f"Getting character information: {identifier!r}")
        failure_prefix = f'Failed to retrieve character "{identifier}"'

        response = await self._query(
            "getCharacterInfo", {"characterName": identifier}, failure_prefix
        )
        if not response.ok:
            logger.error(f"Failed to get character information: {response.message}")
            return response

        raw = response.value
        if not isinstance(raw, Mapping) or not raw:
            failure = Failure(CharacterLookupError(f"{failure_prefix}: no matching character found"))
            logger.error(f"Failed to get character information: {failure.message}")
            return failure

        try:
            record = ActorRecord.model_validate(dict(raw))
        except ValidationError as e:
            failure = Failure(
                CharacterLookupError(
                    f"{failure_prefix}: unreadable character record ({e.error_count()} error(s))",
                    cause=e,
                )
            )
            logger.error(f"Failed to get character information: {failure.message}")
            return failure

        try:
            summary = summarize(record)
        except Exception as e:
            failure = Failure(
                CharacterLookupError(f"{failure_prefix}: unreadable character record", cause=e)
            )
            logger.error(f"Failed to get character information: {failure.message}", exc_info=True)
            return failure

        logger.debug(f"Retrieved character data: {record.id} ({record.name})")
        return Success(summary)

    async def list_characters(self, type_filter: str | None = None) -> Result[CharacterList]:
        """
        List actors known to the host, optionally filtered by type.

        Filtering happens on the host; each actor is reduced to id, name,
        type and whether it has an image.
        """
        args = _validate(ListCharactersArgs, LIST_CHARACTERS, {"type": type_filter})
        if not args.ok:
            return args

        logger.info(f"Listing characters (type: {type_filter or 'any'})")
        failure_prefix = "Failed to list characters"

        params = {"type": type_filter} if type_filter is not None else {}
        response = await self._query("listActors", params, failure_prefix)
        if not response.ok:
            logger.error(response.message)
            return response

        raw = response.value if response.value is not None else []
        if not isinstance(raw, list):
            failure = Failure(
                CharacterLookupError(
                    f"{failure_prefix}: expected a list of actors, got {type(raw).__name__}"
                )
            )
            logger.error(failure.message)
            return failure

        try:
            listings = [
                CharacterListing.from_record(ActorHeader.model_validate(actor))
                for actor in raw
            ]
        except ValidationError as e:
            failure = Failure(
                CharacterLookupError(f"{failure_prefix}: unreadable actor record", cause=e)
            )
            logger.error(failure.message)
            return failure

        logger.debug(f"Retrieved character list: {len(listings)} actor(s)")
        return Success(
            CharacterList(
                characters=listings,
                total=len(listings),
                filtered=f"Filtered by type: {type_filter}" if type_filter else "All characters",
            )
        )
