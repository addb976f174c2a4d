"""
Run the script generator example.

Usage:
    python -m examples.script_generator.run [budget]

Prints the explained cook result for the story outline. No language model
is called.
"""

import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

import config
from kitchen.chef import Chef
from prompt.templates import format_plate_report
from .recipes import script_cookbook

logger = logging.getLogger(__name__)

DEFAULT_STORY_SEED = (
    "In the far future, humanity is ruled by 'Intelligences' - once-human gestalt AIs "
    "that govern vast interstellar empires. Amidst political intrigue and rebellion, a "
    "young smuggler discovers a hidden secret that could change the fate of humanity forever."
)

DEFAULT_CAST = [
    {"name": "Vex Arden", "role": "mentor", "description": "A disgraced archivist of the Intelligences.",
     "arc": "From cynic to martyr"},
    {"name": "Kira Sol", "role": "protagonist", "description": "A young smuggler with a stolen memory core.",
     "arc": "From survivor to revolutionary"},
    {"name": "The Concord", "role": "antagonist", "description": "The gestalt Intelligence ruling the Rim.",
     "arc": "From certainty to fracture"},
]


async def cook_outline(
    story_seed: str = DEFAULT_STORY_SEED,
    cast_notes: Optional[List[Dict[str, Any]]] = None,
    budget: Optional[int] = None,
):
    """
    Cook the story outline, protagonist brief and cast.

    Returns:
        Explained CookResult
    """
    async def supply_seed():
        return story_seed

    chef = Chef(
        {"storySeed": supply_seed, "castNotes": cast_notes if cast_notes is not None else DEFAULT_CAST},
        cookbook=script_cookbook,
    )
    return await chef.cook(["StoryOutline", "Protagonist", "Characters"], budget=budget, explain=True)


def main(argv=None) -> int:
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    )

    argv = sys.argv[1:] if argv is None else argv
    budget = int(argv[0]) if argv else None

    result = asyncio.run(cook_outline(budget=budget))

    print("[context]:")
    print(result.context)
    print(format_plate_report(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
