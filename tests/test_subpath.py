"""
Unit tests for ingredient spec parsing and sub-path extraction.
"""

from dataclasses import dataclass

import pytest

from core.errors import IngredientSyntaxError
from kitchen.subpath import MISSING, extract, parse_ingredient, parse_path, resolve_path


@dataclass
class Character:
    name: str
    traits: list


class TestParseIngredient:
    """Test splitting specs into root token and sub-path"""

    def test_bare_token(self):
        desc = parse_ingredient("sessionId")

        assert desc.root_token == "sessionId"
        assert desc.sub_path is None
        assert desc.steps == ()

    def test_dotted_path(self):
        desc = parse_ingredient("Characters.characters[0].name")

        assert desc.root_token == "Characters"
        assert desc.sub_path == ".characters[0].name"
        assert desc.steps == (("field", "characters"), ("index", 0), ("field", "name"))

    def test_index_directly_after_root(self):
        desc = parse_ingredient("Items[-1]")

        assert desc.root_token == "Items"
        assert desc.steps == (("index", -1),)

    def test_quoted_key(self):
        desc = parse_ingredient('Config["api key"].value')

        assert desc.steps == (("field", "api key"), ("field", "value"))

    @pytest.mark.parametrize("spec", ["", "   ", ".a", "[0]", "Root.", "Root[", "Root[x]", "Root..a"])
    def test_invalid_specs(self, spec):
        with pytest.raises(IngredientSyntaxError):
            parse_ingredient(spec)

    def test_syntax_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_path(".a[")


class TestExtract:
    """Test walking sub-paths into resolved values"""

    def test_nested_mapping_and_list(self):
        value = {"a": {"b": [10, 20]}}

        assert resolve_path(value, ".a.b[1]") == 20

    def test_missing_key(self):
        value = {"a": {"b": [10, 20]}}

        assert resolve_path(value, ".a.c") is MISSING

    def test_negative_index(self):
        assert resolve_path({"items": [1, 2, 3]}, ".items[-1]") == 3

    def test_index_out_of_range(self):
        assert resolve_path({"items": [1]}, ".items[3]") is MISSING

    def test_explicit_none_is_present(self):
        assert resolve_path({"a": None}, ".a") is None

    def test_attribute_access(self):
        value = {"characters": [Character(name="Ada", traits=["curious"])]}

        assert resolve_path(value, ".characters[0].name") == "Ada"
        assert resolve_path(value, ".characters[0].traits[0]") == "curious"
        assert resolve_path(value, ".characters[0].age") is MISSING

    def test_wrong_container_kind(self):
        assert resolve_path({"a": "text"}, ".a.b") is MISSING
        assert resolve_path({"a": "text"}, ".a[0]") is MISSING
        assert resolve_path({"a": [1, 2]}, ".a.b") is MISSING
        assert resolve_path(None, ".a") is MISSING

    def test_integer_index_into_mapping(self):
        assert resolve_path({0: "zero"}, "[0]") == "zero"
        assert resolve_path({"0": "zero"}, "[0]") == "zero"

    def test_no_path_returns_value(self):
        value = {"a": 1}

        assert resolve_path(value, None) is value

    def test_extract_with_parsed_steps(self):
        steps = parse_path('["x y"][1]')

        assert extract({"x y": ["a", "b"]}, steps) == "b"
