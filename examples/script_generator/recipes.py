"""
Recipes for the script generator example.

The cast comes from the ``castNotes`` pantry entry instead of a model call;
the protagonist is always placed first so other recipes can address it as
``characters[0]``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from core.abstractions import Recipe
from kitchen.cookbook import Cookbook, cookbook

script_cookbook = Cookbook()

PROTAGONIST_ROLE = "protagonist"


@dataclass
class Character:
    """Data class representing one member of the cast"""
    name: str
    role: str
    description: str = ""
    arc: str = ""


@dataclass
class CharacterRoster:
    """Data class representing the generated cast"""
    characters: List[Character] = field(default_factory=list)


@cookbook(book=script_cookbook)
class Characters(Recipe):
    description = "Use the story seed to build screenplay characters."
    ingredients = ("storySeed", "castNotes")

    priority = "high"
    compressible = True
    summary_recipe = "CharactersSummary"

    async def prepare(self, seed, cast_notes) -> CharacterRoster:
        characters = [Character(**note) for note in cast_notes]
        if not any(c.role == PROTAGONIST_ROLE for c in characters):
            raise ValueError(f"At least one character for '{seed[:40]}' must have role '{PROTAGONIST_ROLE}'")

        # stable sort keeps the rest of the cast in note order
        characters.sort(key=lambda c: c.role != PROTAGONIST_ROLE)
        return CharacterRoster(characters=characters)


@cookbook(book=script_cookbook)
class CharactersSummary(Recipe):
    description = "Compresses the generated characters."
    ingredients = ("Characters",)

    async def prepare(self, roster: CharacterRoster) -> str:
        return "\n\n".join(
            f"Name: {c.name}\nRole: {c.role}\nDescription: {c.description}"
            for c in roster.characters
        )


@cookbook(book=script_cookbook)
class Protagonist(Recipe):
    description = "One-line brief of the protagonist."
    ingredients = ("Characters.characters[0].name", "Characters.characters[0].arc")
    priority = "critical"

    async def prepare(self, name, arc) -> str:
        return f"Protagonist: {name}. Arc: {arc}"


@cookbook(book=script_cookbook)
class StoryOutline(Recipe):
    description = "Generates a story outline based on the story seed."
    ingredients = ("storySeed", "Characters.characters[0].name", "Characters")
    detail_profiles = {
        "brief": lambda outline: outline["summary"],
    }

    async def prepare(self, seed, protagonist, roster) -> Dict[str, Any]:
        scenes = [
            {
                "title": f"{c.name} crosses paths with {protagonist}",
                "charactersInvolved": [protagonist, c.name],
            }
            for c in roster.characters[1:]
        ]
        return {
            "summary": f"{protagonist} drives the story: {seed}",
            "scenes": scenes,
        }
