"""
Ingredient spec and sub-path handling.

An ingredient spec is a root token optionally followed by a sub-path that
drills into the root's value::

    "sessionId"                      -> whole value of sessionId
    "Characters.characters[0].name"  -> root Characters, path .characters[0].name
    'Config["api key"]'              -> quoted keys may contain any character

Supported steps are ``.field``, ``[index]`` (negative indexes count from the
end) and ``["key"]`` / ``['key']``. Extraction returns a single value; a
missing key, an out-of-range index or a type mismatch yields ``MISSING`` so
the resolver can fail fast instead of passing nothing into a recipe.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any, Optional, Tuple

from core.errors import IngredientSyntaxError
from core.interfaces import IngredientDescriptor


class _Missing:
    """Sentinel for a sub-path that matched nothing"""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

Step = Tuple[str, Any]

_STEP_PATTERN = re.compile(
    r"""
    \.(?P<field>[^.\[\]]+)                    # .field
    | \[\s*(?P<index>-?\d+)\s*\]              # [0], [-1]
    | \[\s*(?P<quote>["'])(?P<key>.*?)(?P=quote)\s*\]   # ["key"], ['key']
    """,
    re.VERBOSE,
)

_SCALARS = (str, bytes, bytearray, int, float, bool)


def parse_path(path: str, spec: Optional[str] = None) -> Tuple[Step, ...]:
    """
    Parse a sub-path such as ``.a.b[1]`` into extraction steps.

    Args:
        path: Sub-path text, starting with ``.`` or ``[``
        spec: Full ingredient spec, used in error messages

    Returns:
        Tuple of ``("field", name)`` / ``("index", n)`` steps

    Raises:
        IngredientSyntaxError: If the path cannot be parsed
    """
    spec = spec if spec is not None else path
    steps = []
    pos = 0
    while pos < len(path):
        match = _STEP_PATTERN.match(path, pos)
        if not match:
            raise IngredientSyntaxError(spec, f"unexpected text at {path[pos:]!r}")
        if match.group("field") is not None:
            name = match.group("field").strip()
            if not name:
                raise IngredientSyntaxError(spec, "empty field name")
            steps.append(("field", name))
        elif match.group("index") is not None:
            steps.append(("index", int(match.group("index"))))
        else:
            steps.append(("field", match.group("key")))
        pos = match.end()

    if not steps:
        raise IngredientSyntaxError(spec, "empty sub-path")
    return tuple(steps)


def parse_ingredient(spec: str) -> IngredientDescriptor:
    """
    Split an ingredient spec into its root token and sub-path.

    Args:
        spec: Ingredient spec, e.g. ``"Characters.characters[0].name"``

    Returns:
        IngredientDescriptor with the root token and normalized sub-path

    Raises:
        IngredientSyntaxError: If the root token is empty or the path is invalid
    """
    if not isinstance(spec, str) or not spec.strip():
        raise IngredientSyntaxError(str(spec), "ingredient must be a non-empty string")

    text = spec.strip()
    cut = min((i for i in (text.find("."), text.find("[")) if i != -1), default=-1)
    if cut == -1:
        return IngredientDescriptor(root_token=text)

    root_token = text[:cut].strip()
    if not root_token:
        raise IngredientSyntaxError(spec, "missing root token")

    sub_path = text[cut:]
    return IngredientDescriptor(root_token=root_token, sub_path=sub_path, steps=parse_path(sub_path, spec))


def _step_into(current: Any, kind: str, key: Any) -> Any:
    if isinstance(current, Mapping):
        if key in current:
            return current[key]
        if kind == "index" and str(key) in current:
            return current[str(key)]
        return MISSING

    if kind == "index":
        if isinstance(current, Sequence) and not isinstance(current, _SCALARS):
            try:
                return current[key]
            except IndexError:
                return MISSING
        return MISSING

    if current is None or isinstance(current, _SCALARS) or isinstance(current, Sequence):
        return MISSING
    return getattr(current, key, MISSING)


def extract(value: Any, steps: Tuple[Step, ...]) -> Any:
    """
    Walk ``steps`` into ``value``.

    Args:
        value: Resolved root value (mappings, sequences or plain objects)
        steps: Steps produced by ``parse_path``

    Returns:
        The extracted value, or ``MISSING`` if any step matched nothing
    """
    current = value
    for kind, key in steps:
        current = _step_into(current, kind, key)
        if current is MISSING:
            return MISSING
    return current


def resolve_path(value: Any, path: Optional[str]) -> Any:
    """Extract ``path`` from ``value``; no path returns the value itself"""
    if not path:
        return value
    return extract(value, parse_path(path))


__all__ = [
    'MISSING',
    'parse_path',
    'parse_ingredient',
    'extract',
    'resolve_path',
]
