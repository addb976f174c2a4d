"""
Unit tests for Chef.trace lineage building.
"""

import pytest
from unittest.mock import MagicMock

from core.abstractions import Recipe
from core.errors import UnresolvedToken


class Characters(Recipe):
    ingredients = ("storySeed",)

    async def prepare(self, seed):
        return {"characters": [{"name": seed}]}


class StoryOutline(Recipe):
    ingredients = ("storySeed", "Characters.characters[0].name", "Characters")

    async def prepare(self, seed, name, characters):
        return f"{seed}: {name}"


class TestTrace:
    """Test dependency lineage"""

    def test_no_ingredients_single_entry(self, book, make_chef):
        book.register_function("Directive", lambda: "obey")

        lineage = make_chef().trace("Directive")

        assert len(lineage) == 1
        assert lineage[0].token == "Directive"
        assert lineage[0].provider_name == "<lambda>"
        assert lineage[0].deps == []

    def test_pantry_token_is_leaf(self, make_chef):
        lineage = make_chef({"storySeed": "a dragon"}).trace("storySeed")

        assert [(e.token, e.provider_name, e.deps) for e in lineage] == [("storySeed", "pantry", [])]

    def test_transitive_deduplicated_root_first(self, book, make_chef):
        book.register("Characters", Characters)
        book.register("StoryOutline", StoryOutline)

        lineage = make_chef({"storySeed": "a dragon"}).trace("StoryOutline")

        assert [e.token for e in lineage] == ["StoryOutline", "storySeed", "Characters"]
        root = lineage[0]
        assert root.provider_name == "StoryOutline"
        assert [(d.token, d.via) for d in root.deps] == [
            ("storySeed", "storySeed"),
            ("Characters", "Characters.characters[0].name"),
            ("Characters", "Characters"),
        ]
        assert [d.token for d in lineage[2].deps] == ["storySeed"]

    def test_trace_does_not_invoke_recipes(self, book, make_chef):
        fn = MagicMock(return_value="x")
        book.register_function("Data", fn, ingredients=["seed"])

        make_chef({"seed": 1}).trace("Data")

        fn.assert_not_called()

    def test_trace_survives_cycles(self, book, make_chef):
        book.register_function("A", lambda b: b, ingredients=["B"])
        book.register_function("B", lambda a: a, ingredients=["A"])

        lineage = make_chef().trace("A")

        assert [e.token for e in lineage] == ["A", "B"]

    def test_unknown_dependency(self, book, make_chef):
        book.register_function("Data", lambda seed: seed, ingredients=["seed"])

        with pytest.raises(UnresolvedToken):
            make_chef().trace("Data")
