"""
Pytest configuration and fixtures for kitchen tests.

Every test gets its own Cookbook so registrations never leak between tests
or into ``default_cookbook``.
"""

import pytest

from kitchen.chef import Chef
from kitchen.cookbook import Cookbook


class LengthTokenizer:
    """Tokenizer counting one token per character, for exact cost arithmetic"""

    def count_tokens(self, text: str) -> int:
        return len(text)


@pytest.fixture
def book():
    """Create an empty cookbook for testing"""
    return Cookbook()


@pytest.fixture
def make_chef(book):
    """Factory creating chefs over the test cookbook"""
    def _make_chef(pantry=None):
        return Chef(pantry, cookbook=book)
    return _make_chef


@pytest.fixture
def length_tokenizer():
    return LengthTokenizer()
