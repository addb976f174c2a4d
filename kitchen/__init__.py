"""
Context kitchen: dependency-aware context assembly.

Recipes registered in a Cookbook declare the tokens they consume; a Chef
resolves them against its Pantry and cooks the results into a budgeted
context string.
"""

from .cookbook import Cookbook, default_cookbook, cookbook
from .pantry import Pantry
from .subpath import MISSING, parse_ingredient, parse_path, extract, resolve_path
from .materializer import Materializer
from .chef import Chef, normalize_order

__all__ = [
    'Chef',
    'Cookbook',
    'default_cookbook',
    'cookbook',
    'Pantry',
    'Materializer',
    'normalize_order',
    'MISSING',
    'parse_ingredient',
    'parse_path',
    'extract',
    'resolve_path',
]
