"""
Error taxonomy for context resolution.

Every failure raised while resolving tokens derives from ``KitchenError`` so
callers of ``Chef.cook`` can catch the whole family in one place. Compression
failures are the only errors the engine recovers from on its own; everything
here propagates to the caller.
"""

from typing import Sequence


class KitchenError(Exception):
    """Base class for all context resolution errors."""


class UnresolvedToken(KitchenError, KeyError):
    """A token is neither in the pantry nor registered in the cookbook."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(token)

    def __str__(self) -> str:
        return (
            f'no provider found for "{self.token}". '
            f"It is neither in the pantry nor registered as a recipe."
        )


class ContractViolation(KitchenError):
    """A declared ingredient sub-path extracted nothing from its root value."""

    def __init__(self, ingredient: str, recipe_name: str = None):
        self.ingredient = ingredient
        self.recipe_name = recipe_name
        where = f" (required by {recipe_name})" if recipe_name else ""
        super().__init__(f'ingredient "{ingredient}" resolved to nothing{where}')


class CyclicDependency(KitchenError):
    """A token was requested again while it was still being resolved."""

    def __init__(self, path: Sequence[str]):
        self.path = tuple(path)
        super().__init__(f"cyclic dependency: {' -> '.join(self.path)}")


class IngredientSyntaxError(KitchenError, ValueError):
    """An ingredient spec or sub-path could not be parsed."""

    def __init__(self, spec: str, detail: str):
        self.spec = spec
        super().__init__(f'invalid ingredient "{spec}": {detail}')


__all__ = [
    'KitchenError',
    'UnresolvedToken',
    'ContractViolation',
    'CyclicDependency',
    'IngredientSyntaxError',
]
