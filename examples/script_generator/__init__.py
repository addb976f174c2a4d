"""
Script generator example.

Builds a cast and a story outline from a story seed. Recipes read single
fields out of the cast through sub-path ingredients such as
``Characters.characters[0].name``.
"""
