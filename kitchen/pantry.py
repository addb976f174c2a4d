"""
Pantry: externally supplied raw values for one Chef.

Entries are either immediate values or zero-argument suppliers (plain or
async). Suppliers run lazily on every access; the pantry never caches their
results, so a supplier that should only run once has to memoize itself.
"""

import inspect
from typing import Any, Callable, Dict, Iterator, Mapping, Optional


class Pantry:
    """Per-chef table of token -> value or supplier"""

    def __init__(self, items: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = {}
        self._suppliers: Dict[str, Callable[[], Any]] = {}
        for token, thing in (items or {}).items():
            self.put(token, thing)

    def put(self, token: str, thing: Any) -> None:
        """Store an immediate value, or a supplier if ``thing`` is callable"""
        self._values.pop(token, None)
        self._suppliers.pop(token, None)
        if callable(thing):
            self._suppliers[token] = thing
        else:
            self._values[token] = thing

    def is_supplier(self, token: str) -> bool:
        return token in self._suppliers

    async def get(self, token: str) -> Any:
        """
        Return the value for ``token``, invoking its supplier if needed.

        Raises:
            KeyError: If the token is not in the pantry
        """
        if token in self._values:
            return self._values[token]

        supplier = self._suppliers[token]
        result = supplier()
        if inspect.isawaitable(result):
            result = await result
        return result

    def __contains__(self, token: object) -> bool:
        return token in self._values or token in self._suppliers

    def __iter__(self) -> Iterator[str]:
        yield from self._values
        yield from self._suppliers

    def __len__(self) -> int:
        return len(self._values) + len(self._suppliers)

    def __repr__(self) -> str:
        return f"<Pantry(values={len(self._values)}, suppliers={len(self._suppliers)})>"
