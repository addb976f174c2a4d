"""
Core abstractions for the context kitchen.

This module defines the abstract base class for recipes (the named providers
that turn ingredient tokens into a value) and the tokenizer protocol used to
price rendered text. Recipes are plain classes: the kitchen reads their class
attributes as static hints and never needs reflection on method signatures.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, Optional, Protocol, Sequence, Union


PriorityTag = Union[str, int, float]
DetailProfile = Callable[[Any], Any]


class Recipe(ABC):
    """
    Abstract base class for a recipe.

    Subclasses set ``description`` and ``ingredients`` and implement
    ``prepare``. Each ingredient spec names a root token, optionally followed
    by a sub-path (``"Characters.characters[0].name"``); resolved values are
    passed to ``prepare`` positionally, in declared order.

    Optional hints:
        token: Name to register under when using the ``@cookbook`` decorator
            (defaults to the class name).
        priority: App-defined priority tag, string or number.
        compressible: Whether a summary fallback may be used under budget.
        summary_recipe: Token of a recipe producing a smaller substitute.
        detail_profiles: Mapping of detail label to ``(value) -> alt_value``.
    """

    description: ClassVar[str] = ""
    ingredients: ClassVar[Sequence[str]] = ()

    token: ClassVar[Optional[str]] = None
    priority: ClassVar[Optional[PriorityTag]] = None
    compressible: ClassVar[bool] = False
    summary_recipe: ClassVar[Optional[str]] = None
    detail_profiles: ClassVar[Dict[str, DetailProfile]] = {}

    @abstractmethod
    async def prepare(self, *ingredients: Any) -> Any:
        """
        Produce this recipe's value.

        Args:
            *ingredients: Resolved ingredient values, in declared order.

        Returns:
            The prepared value (text or any JSON-like structure).
        """
        pass


class Tokenizer(Protocol):
    """Protocol for tokenizer implementations"""

    def count_tokens(self, text: str) -> int:
        """Count tokens in text"""
        ...
