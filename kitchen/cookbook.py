"""
Cookbook: the registry of named recipes.

A ``Cookbook`` maps token names to ``RecipeDefinition`` records. Registration
parses each recipe's ingredient specs once, so resolution never has to
inspect method signatures. Registering a token twice replaces the earlier
definition (last write wins). No dependency validation happens here: missing
ingredients and cycles surface when a ``Chef`` resolves the token.

A process-wide ``default_cookbook`` backs the ``@cookbook`` decorator; write
to it during start-up, before any ``Chef`` is constructed.
"""

import inspect
import logging
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence

from core.abstractions import DetailProfile, PriorityTag, Recipe
from core.interfaces import RecipeDefinition
from .subpath import parse_ingredient

logger = logging.getLogger(__name__)


class Cookbook:
    """
    Table of token name -> recipe definition.

    Each definition carries the provider (a ``Recipe`` subclass or a plain
    callable), its parsed ingredients and its static hints. The provider
    object is the identity a ``Chef`` caches on, so registering one class
    under several tokens creates aliases that share a single cached value.
    """

    def __init__(self):
        self._recipes: Dict[str, RecipeDefinition] = {}

    def register(
        self,
        token: str,
        recipe_cls: type,
        *,
        priority: Optional[PriorityTag] = None,
        compressible: Optional[bool] = None,
        summary_recipe: Optional[str] = None,
        detail_profiles: Optional[Mapping[str, DetailProfile]] = None,
    ) -> RecipeDefinition:
        """
        Register a ``Recipe`` subclass under ``token``.

        Keyword hints override the class attributes of the same name.

        Args:
            token: Token name to register
            recipe_cls: Recipe subclass implementing ``prepare``
            priority: Optional priority tag override
            compressible: Optional compressible flag override
            summary_recipe: Optional summary token override
            detail_profiles: Optional detail profile override

        Returns:
            The stored RecipeDefinition

        Raises:
            TypeError: If recipe_cls is not a Recipe subclass
            IngredientSyntaxError: If an ingredient spec is malformed
        """
        if not (inspect.isclass(recipe_cls) and issubclass(recipe_cls, Recipe)):
            raise TypeError(f"{recipe_cls!r} is not a Recipe subclass")

        definition = RecipeDefinition(
            token=token,
            name=recipe_cls.__name__,
            provider=recipe_cls,
            ingredients=tuple(parse_ingredient(spec) for spec in recipe_cls.ingredients),
            description=recipe_cls.description,
            priority=priority if priority is not None else recipe_cls.priority,
            compressible=compressible if compressible is not None else recipe_cls.compressible,
            summary_recipe=summary_recipe if summary_recipe is not None else recipe_cls.summary_recipe,
            detail_profiles=dict(detail_profiles if detail_profiles is not None else recipe_cls.detail_profiles),
        )
        return self._store(definition)

    def register_function(
        self,
        token: str,
        prepare: Callable[..., Any],
        *,
        ingredients: Sequence[str] = (),
        description: str = "",
        name: Optional[str] = None,
        priority: Optional[PriorityTag] = None,
        compressible: bool = False,
        summary_recipe: Optional[str] = None,
        detail_profiles: Optional[Mapping[str, DetailProfile]] = None,
    ) -> RecipeDefinition:
        """
        Register a plain or async callable as a recipe.

        The callable receives the resolved ingredients positionally and is
        itself the provider identity for caching.
        """
        if not callable(prepare):
            raise TypeError(f"{prepare!r} is not callable")

        definition = RecipeDefinition(
            token=token,
            name=name or getattr(prepare, "__name__", token),
            provider=prepare,
            ingredients=tuple(parse_ingredient(spec) for spec in ingredients),
            description=description,
            priority=priority,
            compressible=compressible,
            summary_recipe=summary_recipe,
            detail_profiles=dict(detail_profiles or {}),
        )
        return self._store(definition)

    def _store(self, definition: RecipeDefinition) -> RecipeDefinition:
        if definition.token in self._recipes:
            logger.debug(f"Replacing recipe for token '{definition.token}' with {definition.name}")
        self._recipes[definition.token] = definition
        return definition

    def lookup(self, token: str) -> Optional[RecipeDefinition]:
        """Return the definition registered under ``token``, if any"""
        return self._recipes.get(token)

    def tokens(self) -> List[str]:
        """Registered tokens in registration order"""
        return list(self._recipes)

    def clear(self) -> None:
        self._recipes.clear()

    def __contains__(self, token: object) -> bool:
        return token in self._recipes

    def __len__(self) -> int:
        return len(self._recipes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._recipes)

    def __repr__(self) -> str:
        return f"<Cookbook(recipes={len(self._recipes)})>"


default_cookbook = Cookbook()


def cookbook(target=None, *, book: Optional[Cookbook] = None):
    """
    Class decorator registering a recipe in a cookbook.

    Usable bare (``@cookbook``) to register under the class attribute
    ``token`` or the class name, or with an explicit token
    (``@cookbook("Characters")``). ``book`` selects a cookbook other than
    ``default_cookbook``.
    """
    def _register(recipe_cls, token=None):
        target_book = book if book is not None else default_cookbook
        target_book.register(token or recipe_cls.token or recipe_cls.__name__, recipe_cls)
        return recipe_cls

    if inspect.isclass(target):
        return _register(target)

    def decorator(recipe_cls):
        return _register(recipe_cls, target)

    return decorator


__all__ = [
    'Cookbook',
    'default_cookbook',
    'cookbook',
]
