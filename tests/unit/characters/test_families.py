"""
Unit tests for game-system decoding and family detection.
"""

import pytest

from actorlens.characters.families import (
    DndSystem,
    GameFamily,
    UnrecognizedSystem,
    WfrpSystem,
    decode_system,
    detect_family,
    is_set,
)


class TestDetectFamily:
    """Classification of raw system blocks."""

    @pytest.mark.parametrize(
        "system",
        [
            {"status": {"wounds": {"value": 10, "max": 12}}},
            {"status": {"wounds": {}}},
            {"status": {"wounds": {"value": 3}}, "attributes": {"hp": {"value": 5}}},
            {"status": {"wounds": {"value": 3}}, "abilities": {"str": {"value": 14}}},
        ],
    )
    def test_wounds_marker_is_wfrp(self, system):
        """Any record with status.wounds is WFRP, even with D&D fields present."""
        assert detect_family(system) is GameFamily.WFRP

    def test_characteristics_marker_is_wfrp(self):
        """characteristics alone is enough to classify as WFRP."""
        assert detect_family({"characteristics": {"ws": {"value": 31}}}) is GameFamily.WFRP

    @pytest.mark.parametrize(
        "system",
        [
            {"attributes": {"hp": {"value": 5, "max": 20}}},
            {"attributes": {"hp": {"value": 5}}, "abilities": {"dex": {"value": 16}}},
            {"abilities": {"str": {"value": 10}}},
        ],
    )
    def test_attribute_records_are_dnd(self, system):
        """Records with hp/abilities and no WFRP markers are D&D-like."""
        assert detect_family(system) is GameFamily.DND

    @pytest.mark.parametrize("system", [{}, None, {"notes": "just a name"}, "garbage", 42])
    def test_minimal_records_default_to_dnd(self, system):
        """Ambiguous or minimal blocks fall back to the class/level family."""
        assert detect_family(system) is GameFamily.DND

    @pytest.mark.parametrize(
        "system",
        [
            {"characteristics": None},
            {"status": {"wounds": None}},
            {"status": {"wounds": 0}},
            {"status": "wounded"},
        ],
    )
    def test_falsy_markers_do_not_count(self, system):
        """Null or falsy marker values are treated as absent."""
        assert detect_family(system) is GameFamily.DND

    def test_detection_is_deterministic(self):
        """Identical input always yields the same family."""
        system = {"characteristics": {"t": {"value": 40}}}
        assert {detect_family(system) for _ in range(5)} == {GameFamily.WFRP}


class TestDecodeSystem:
    """The tagged-union decode step."""

    def test_wfrp_variant_carries_typed_fields(self):
        """WFRP blocks decode into typed characteristics and status."""
        decoded = decode_system({
            "characteristics": {"t": {"initial": 35, "advances": 5, "value": "40"}},
            "status": {"wounds": {"value": 10, "max": 12}, "armour": {"head": 2}},
        })

        assert isinstance(decoded, WfrpSystem)
        assert decoded.family is GameFamily.WFRP
        assert decoded.characteristics["t"].value == 40
        assert decoded.status.wounds.max == 12
        assert decoded.status.armour.value is None
        assert decoded.status.armour.head == 2

    def test_dnd_variant_reads_class_alias(self):
        """The reserved word 'class' is exposed as class_."""
        decoded = decode_system({"details": {"class": "Wizard", "level": {"value": 5}}})

        assert isinstance(decoded, DndSystem)
        assert decoded.details.class_ == "Wizard"
        assert decoded.details.level.value == 5

    def test_missing_system_is_empty_dnd(self):
        """A null system block decodes as an empty class/level system."""
        decoded = decode_system(None)

        assert isinstance(decoded, DndSystem)
        assert decoded.attributes is None
        assert decoded.abilities is None

    def test_non_mapping_system_is_unrecognized(self):
        """A system block that is not a mapping is unrecognized."""
        decoded = decode_system(["not", "a", "mapping"])

        assert isinstance(decoded, UnrecognizedSystem)
        assert decoded.family is None
        assert "list" in decoded.reason

    def test_junk_leaf_values_do_not_break_decoding(self):
        """Non-numeric leaves become None instead of failing the family."""
        decoded = decode_system({"characteristics": {"ws": {"value": "lots"}}})

        assert isinstance(decoded, WfrpSystem)
        assert decoded.characteristics["ws"].value is None

    @pytest.mark.parametrize("raw", ["Infinity", "-Infinity", "nan", float("inf"), float("nan"), "1e400"])
    def test_non_finite_numbers_become_none(self, raw):
        decoded = decode_system({"characteristics": {"t": {"value": raw, "initial": 30}}})

        assert isinstance(decoded, WfrpSystem)
        assert decoded.characteristics["t"].value is None
        assert decoded.characteristics["t"].initial == 30

    def test_rich_text_names_are_unwrapped(self):
        """Skill and talent names given as {"value": ...} become plain strings."""
        decoded = decode_system({
            "status": {"wounds": {"value": 5}},
            "skills": {"s1": {"name": {"value": "Melee"}}, "s2": {"name": ["odd"]}},
            "talents": [{"name": {"value": "Luck"}}],
        })

        assert decoded.skills["s1"].name == "Melee"
        assert decoded.skills["s2"].name == "['odd']"
        assert decoded.talents["0"].name == "Luck"

    def test_non_mapping_entries_are_skipped(self):
        """Only mapping entries survive in keyed sections."""
        decoded = decode_system({
            "characteristics": {"ws": {"value": 30}, "note": "ignore me"},
        })

        assert list(decoded.characteristics) == ["ws"]

    def test_list_sections_keep_order(self):
        """List-shaped sections are accepted and keep their order."""
        decoded = decode_system({
            "status": {"wounds": {"value": 1}},
            "talents": [{"name": "Luck"}, {"name": "Hardy"}],
        })

        assert [talent.name for talent in decoded.talents.values()] == ["Luck", "Hardy"]

    def test_decoding_does_not_mutate_input(self):
        """The raw block is left untouched."""
        system = {"characteristics": {"t": {"value": "40"}}, "talents": [{"name": "Luck"}]}
        snapshot = {"characteristics": {"t": {"value": "40"}}, "talents": [{"name": "Luck"}]}

        decode_system(system)

        assert system == snapshot


class TestIsSet:
    """JSON-style presence checks."""

    @pytest.mark.parametrize("value", [{}, [], {"a": 1}, 1, "x", True])
    def test_present(self, value):
        assert is_set(value) is True

    @pytest.mark.parametrize("value", [None, 0, "", False])
    def test_absent(self, value):
        assert is_set(value) is False
