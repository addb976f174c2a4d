"""
Chef: resolves tokens and cooks budgeted context.

A ``Chef`` owns a pantry of externally supplied values and reads recipes from
a cookbook. It resolves tokens recursively (pantry first, then recipes),
memoizes every recipe's output for the lifetime of the instance, and
assembles prepared items into a context string under an optional token
budget, with per-item provenance on request.
"""

import asyncio
import inspect
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import config
from core.abstractions import Tokenizer
from core.errors import ContractViolation, CyclicDependency, UnresolvedToken
from prompt.planner import plan_budget
from prompt.templates import join_plates
from prompt.tokens import CountTokens, TokenCounter
from core.interfaces import (
    DROPPED,
    FORCED_INCLUDE,
    INCLUDED,
    CookResult,
    OrderItem,
    OrderLike,
    PlateInfo,
    RankPriority,
    RecipeDefinition,
    TraceDependency,
    TraceEntry,
)
from .cookbook import Cookbook, default_cookbook
from .materializer import Materializer
from .pantry import Pantry
from .subpath import MISSING, extract

logger = logging.getLogger(__name__)

# (token, provider) pairs currently being resolved on one call chain
Chain = Tuple[Tuple[str, Any], ...]


def normalize_order(order: Optional[Sequence[OrderLike]], cookbook: Cookbook) -> List[Tuple[str, str]]:
    """
    Normalize an order into ``(token, detail)`` pairs.

    Bare tokens default to the configured detail label. An empty or missing
    order means every registered token, in registration order.
    """
    if not order:
        return [(token, config.DEFAULT_DETAIL) for token in cookbook.tokens()]

    normalized = []
    for item in order:
        if isinstance(item, str):
            token, detail = item, None
        elif isinstance(item, OrderItem):
            token, detail = item.token, item.detail
        elif isinstance(item, Mapping):
            token, detail = item["token"], item.get("detail")
        elif isinstance(item, tuple) and len(item) == 2:
            token, detail = item
        else:
            raise TypeError(f"Invalid order item: {item!r}")
        normalized.append((token, detail or config.DEFAULT_DETAIL))
    return normalized


class Chef:
    """
    Resolution and budgeting engine for one pantry.

    Caches are per instance: a recipe runs at most once per Chef, even across
    cook calls, and a fresh Chef starts with fresh memoization.
    """

    def __init__(
        self,
        pantry: Union[Pantry, Mapping[str, Any], None] = None,
        cookbook: Optional[Cookbook] = None,
    ):
        """
        Initialize Chef.

        Args:
            pantry: Pantry, or mapping of token -> value / zero-arg supplier
            cookbook: Cookbook to read recipes from (default: default_cookbook)
        """
        self.pantry = pantry if isinstance(pantry, Pantry) else Pantry(pantry)
        self.cookbook = cookbook if cookbook is not None else default_cookbook

        self._instance_cache: Dict[Any, Any] = {}
        self._value_cache: Dict[Any, Any] = {}
        self._inflight_locks: Dict[Any, asyncio.Lock] = {}

    def definition_for(self, token: str) -> Optional[RecipeDefinition]:
        """Recipe definition serving ``token``; None for pantry tokens"""
        if token in self.pantry:
            return None
        return self.cookbook.lookup(token)

    async def prepare(self, token: str, *, timeout: Optional[float] = None) -> Any:
        """
        Resolve a token to its value.

        Args:
            token: Token to resolve
            timeout: Seconds before giving up (default from config, 0 disables)

        Returns:
            The pantry value or the recipe's (memoized) output

        Raises:
            UnresolvedToken: If the token or one of its ingredients is unknown
            ContractViolation: If an ingredient sub-path extracts nothing
            CyclicDependency: If the token depends on itself
            asyncio.TimeoutError: If resolution takes longer than timeout
        """
        return await self._with_timeout(self.resolve(token), timeout)

    async def resolve(self, token: str, chain: Chain = ()) -> Any:
        """Resolve ``token`` on the given resolution chain"""
        if token in self.pantry:
            return await self.pantry.get(token)

        definition = self.cookbook.lookup(token)
        if definition is None:
            raise UnresolvedToken(token)

        key = definition.provider
        if key in self._value_cache:
            logger.debug(f"Cache hit for '{token}' ({definition.name})")
            return self._value_cache[key]

        for position, (_, provider) in enumerate(chain):
            if provider is key:
                raise CyclicDependency([t for t, _ in chain[position:]] + [token])

        if key not in self._inflight_locks:
            self._inflight_locks[key] = asyncio.Lock()

        async with self._inflight_locks[key]:
            # Another cook may have finished this recipe while we waited.
            if key in self._value_cache:
                return self._value_cache[key]

            value = await self._invoke_recipe(definition, chain + ((token, key),))
            self._value_cache[key] = value
            return value

    async def _invoke_recipe(self, definition: RecipeDefinition, chain: Chain) -> Any:
        prepare = self._get_prepare(definition)

        resolved_args = []
        for desc in definition.ingredients:
            root_value = await self.resolve(desc.root_token, chain)

            value = root_value
            if desc.sub_path:
                value = extract(root_value, desc.steps)
                if value is MISSING:
                    raise ContractViolation(desc.spec, definition.name)

            resolved_args.append(value)

        logger.debug(f"Invoking recipe {definition.name} for '{definition.token}'")
        result = prepare(*resolved_args)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _get_prepare(self, definition: RecipeDefinition):
        provider = definition.provider
        if not inspect.isclass(provider):
            return provider

        instance = self._instance_cache.get(provider)
        if instance is None:
            instance = provider()
            self._instance_cache[provider] = instance
        return instance.prepare

    def trace(self, root_token: str) -> List[TraceEntry]:
        """
        Build the dependency lineage of a token.

        Walks ingredient metadata only; no recipe is invoked. Each reachable
        token appears exactly once in pre-order: the root first, then its
        ingredients depth-first in declared order. Pantry tokens are leaves.
        Each dependency's ``via`` is the ingredient spec as declared
        (``"Profile.address.city"``), without any decorator wrapping.

        Raises:
            UnresolvedToken: If a reachable token is unknown
        """
        seen: Dict[str, TraceEntry] = {}

        def visit(token: str) -> None:
            if token in seen:
                return

            if token in self.pantry:
                seen[token] = TraceEntry(token=token, provider_name=config.PANTRY_PROVIDER_NAME)
                return

            definition = self.cookbook.lookup(token)
            if definition is None:
                raise UnresolvedToken(token)

            entry = TraceEntry(
                token=token,
                provider_name=definition.name,
                deps=[TraceDependency(token=desc.root_token, via=desc.spec) for desc in definition.ingredients],
            )
            seen[token] = entry
            for dep in entry.deps:
                visit(dep.token)

        visit(root_token)
        return list(seen.values())

    async def cook(
        self,
        order: Optional[Sequence[OrderLike]] = None,
        *,
        budget: Optional[int] = None,
        count_tokens: Optional[Union[CountTokens, Tokenizer, TokenCounter]] = None,
        rank_priority: Optional[RankPriority] = None,
        explain: bool = False,
        timeout: Optional[float] = None,
    ) -> Union[str, CookResult]:
        """
        Assemble context for an order.

        Args:
            order: Tokens to plate; strings, OrderItems, (token, detail)
                tuples or {"token", "detail"} mappings. Defaults to the whole
                cookbook.
            budget: Approximate token budget for the plated context. The
                first item is always included, even if it alone exceeds it.
            count_tokens: Tokenizer or counting function (default heuristic)
            rank_priority: Priority ranker (default: tag-based heuristic)
            explain: Return a CookResult with per-item plates
            timeout: Seconds before giving up (default from config, 0 disables)

        Returns:
            The context string, or a CookResult when explain is True
        """
        result = await self._with_timeout(
            self._cook(order, budget, count_tokens, rank_priority, explain),
            timeout,
        )
        return result if explain else result.context

    async def _cook(self, order, budget, count_tokens, rank_priority, explain) -> CookResult:
        token_counter = count_tokens if isinstance(count_tokens, TokenCounter) else TokenCounter(count_tokens)
        materializer = Materializer(self, token_counter, rank_priority)

        prepared_items = []
        for index, (token, detail) in enumerate(normalize_order(order, self.cookbook)):
            prepared_items.append(await materializer.materialize(token, detail, index, explain))

        plan = plan_budget(prepared_items, budget)

        # Plate in original order; running totals follow plating order.
        included = []
        plates = []
        running_total = 0
        for item in prepared_items:
            before = running_total
            decision = plan[item.index]

            if decision.include:
                included.append(decision.used_rendered)
                running_total += decision.used_cost

            if explain:
                if not decision.include:
                    kind = DROPPED
                elif decision.forced:
                    kind = FORCED_INCLUDE
                else:
                    kind = INCLUDED

                plates.append(PlateInfo(
                    token=item.token,
                    decision=kind,
                    reason=decision.reason,
                    served_detail=item.detail,
                    priority_tag=item.priority_tag,
                    priority_score=item.priority_score,
                    was_compressed=decision.used_compressed,
                    compression_note=item.compression_note if decision.used_compressed else None,
                    original_cost=item.baseline_cost,
                    compressed_cost=item.compressed_cost,
                    cost=decision.used_cost,
                    running_total_before=before,
                    running_total_after=running_total,
                    lineage=item.lineage,
                ))

        logger.info(
            f"Cooked {len(included)}/{len(prepared_items)} items, "
            f"total tokens: {running_total} (budget: {budget})"
        )

        return CookResult(
            context=join_plates(included),
            total_tokens=running_total,
            budget=budget,
            plates=plates,
        )

    async def _with_timeout(self, coro, timeout: Optional[float]):
        if timeout is None:
            timeout = config.COOK_TIMEOUT
        if not timeout:
            return await coro
        return await asyncio.wait_for(coro, timeout=timeout)

    def __repr__(self) -> str:
        return f"<Chef(pantry={len(self.pantry)}, cached={len(self._value_cache)})>"
