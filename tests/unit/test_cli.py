"""
Tests for the actorlens CLI.

Parser-level checks plus command execution with the bridge mocked out.
"""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from actorlens.__main__ import cmd_config, cmd_get, cmd_list, create_parser
from actorlens.characters.results import (
    CharacterLookupError,
    CharacterValidationError,
    Failure,
    Success,
)
from actorlens.characters.summary import CharacterList, CharacterListing, CharacterSummary
from actorlens.config.settings import Settings


@pytest.fixture
def settings():
    return Settings(_env_file=None)


def _mock_tools(**results) -> AsyncMock:
    """CharacterTools stand-in usable as an async context manager."""
    tools = AsyncMock()
    tools.__aenter__.return_value = tools
    for name, result in results.items():
        getattr(tools, name).return_value = result
    return tools


class TestParser:

    def test_get_requires_identifier(self):
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["get"])

    def test_get_identifier_positional(self):
        args = create_parser().parse_args(["get", "Grom"])

        assert args.command == "get"
        assert args.identifier == "Grom"

    def test_list_type_defaults_to_none(self):
        args = create_parser().parse_args(["list"])

        assert args.command == "list"
        assert args.type is None

    def test_list_type_flag(self):
        args = create_parser().parse_args(["list", "--type", "npc"])

        assert args.type == "npc"

    def test_serve_and_config_subcommands(self):
        parser = create_parser()

        assert parser.parse_args(["serve"]).command == "serve"
        assert parser.parse_args(["config"]).command == "config"

    def test_global_flags(self):
        args = create_parser().parse_args(["--log-level", "DEBUG", "config"])

        assert args.log_level == "DEBUG"


class TestCommands:

    def test_config_succeeds(self, settings):
        assert cmd_config(settings) == 0

    @pytest.mark.asyncio
    async def test_get_prints_summary_json(self, settings, capsys):
        summary = CharacterSummary(id="a1", name="Grom", type="character", has_image=True)
        tools = _mock_tools(lookup_character=Success(summary))

        with patch("actorlens.__main__.build_tools", return_value=tools):
            exit_code = await cmd_get(SimpleNamespace(identifier="Grom"), settings)

        assert exit_code == 0
        tools.lookup_character.assert_awaited_once_with("Grom")
        output = json.loads(capsys.readouterr().out)
        assert output["name"] == "Grom"
        assert output["hasImage"] is True

    @pytest.mark.asyncio
    async def test_get_failure_returns_1(self, settings, capsys):
        failure = Failure(CharacterLookupError('Failed to retrieve character "X": not found'))
        tools = _mock_tools(lookup_character=failure)

        with patch("actorlens.__main__.build_tools", return_value=tools):
            exit_code = await cmd_get(SimpleNamespace(identifier="X"), settings)

        assert exit_code == 1
        assert capsys.readouterr().out == ""

    @pytest.mark.asyncio
    async def test_get_validation_failure_returns_1(self, settings):
        failure = Failure(CharacterValidationError("Character identifier cannot be empty"))
        tools = _mock_tools(lookup_character=failure)

        with patch("actorlens.__main__.build_tools", return_value=tools):
            exit_code = await cmd_get(SimpleNamespace(identifier=""), settings)

        assert exit_code == 1

    @pytest.mark.asyncio
    async def test_get_without_bridge_returns_1(self, settings):
        """No bridge path configured: the command fails cleanly."""
        exit_code = await cmd_get(SimpleNamespace(identifier="Grom"), settings)

        assert exit_code == 1

    @pytest.mark.asyncio
    async def test_list_prints_listing_json(self, settings, capsys):
        listing = CharacterList(
            characters=[CharacterListing(id="n1", name="Ulrika", type="npc")],
            total=1,
            filtered="Filtered by type: npc",
        )
        tools = _mock_tools(list_characters=Success(listing))

        with patch("actorlens.__main__.build_tools", return_value=tools):
            exit_code = await cmd_list(SimpleNamespace(type="npc"), settings)

        assert exit_code == 0
        tools.list_characters.assert_awaited_once_with("npc")
        output = json.loads(capsys.readouterr().out)
        assert output["total"] == 1
        assert output["characters"][0]["hasImage"] is False
