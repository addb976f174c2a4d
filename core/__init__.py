"""
Core building blocks shared by the kitchen and prompt packages.
"""

from .abstractions import Recipe, Tokenizer, PriorityTag, DetailProfile
from .errors import (
    KitchenError,
    UnresolvedToken,
    ContractViolation,
    CyclicDependency,
    IngredientSyntaxError,
)

__all__ = [
    'Recipe',
    'Tokenizer',
    'PriorityTag',
    'DetailProfile',
    'KitchenError',
    'UnresolvedToken',
    'ContractViolation',
    'CyclicDependency',
    'IngredientSyntaxError',
]
