"""
Materializer: turns one order item into a priced rendering.

For a requested ``(token, detail)`` pair the materializer resolves the
baseline value, applies the recipe's detail profile when one matches,
renders to text and prices it. Compressible recipes with a summary recipe
also get a compressed fallback; that attempt is best-effort and never fails
the cook.
"""

import inspect
import logging
from typing import TYPE_CHECKING, Any, Optional

import config
from prompt.priority import default_rank_priority
from prompt.templates import render_value
from prompt.tokens import TokenCounter
from core.interfaces import (
    CompressionAttempt,
    PreparedItem,
    PriorityInfo,
    RankPriority,
    RecipeDefinition,
)

if TYPE_CHECKING:
    from .chef import Chef

logger = logging.getLogger(__name__)


class Materializer:
    """Prepares, renders and prices order items for one cook call"""

    def __init__(
        self,
        chef: "Chef",
        token_counter: TokenCounter,
        rank_priority: Optional[RankPriority] = None,
    ):
        self.chef = chef
        self.token_counter = token_counter
        self.rank_priority = rank_priority or default_rank_priority

    async def materialize(self, token: str, detail: str, index: int, explain: bool = False) -> PreparedItem:
        """
        Materialize one order item.

        Args:
            token: Requested token
            detail: Requested detail label
            index: Position of the item in the order
            explain: Whether to compute lineage

        Returns:
            PreparedItem with baseline (and maybe compressed) rendering
        """
        value = await self.chef.resolve(token)

        definition = self.chef.definition_for(token)
        recipe_name = definition.name if definition else config.PANTRY_PROVIDER_NAME
        priority_tag = definition.priority if definition else None

        materialized = await self._apply_detail_profile(definition, detail, value)
        baseline_rendered = render_value(materialized)
        baseline_cost = self.token_counter.count_tokens(baseline_rendered)
        logger.debug(f"Preparing token '{token}' ({detail}): baseline cost = {baseline_cost} tokens")

        item = PreparedItem(
            token=token,
            detail=detail,
            index=index,
            recipe_name=recipe_name,
            baseline_rendered=baseline_rendered,
            baseline_cost=baseline_cost,
            priority_tag=priority_tag,
            priority_score=self.rank_priority(
                PriorityInfo(token=token, recipe_name=recipe_name, priority_tag=priority_tag, index=index)
            ),
        )

        if definition and definition.compressible and definition.summary_recipe:
            attempt = await self.try_compress(definition)
            if attempt.ok:
                item.compressed_rendered = attempt.rendered
                item.compressed_cost = attempt.cost
                item.compression_note = attempt.note

        if explain:
            item.lineage = self.chef.trace(token)

        return item

    async def _apply_detail_profile(self, definition: Optional[RecipeDefinition], detail: str, value: Any) -> Any:
        # Unknown detail labels fall back to the raw value.
        profile = definition.detail_profiles.get(detail) if definition else None
        if profile is None:
            return value
        result = profile(value)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def try_compress(self, definition: RecipeDefinition) -> CompressionAttempt:
        """
        Resolve the recipe's summary token as a compressed fallback.

        Returns:
            CompressionAttempt; ``ok`` is False if anything went wrong
        """
        summary_token = definition.summary_recipe
        try:
            summary_value = await self.chef.resolve(summary_token)
            rendered = render_value(summary_value)
            cost = self.token_counter.count_tokens(rendered)
        except Exception as e:
            logger.warning(f"Failed to prepare summary '{summary_token}' for '{definition.token}': {e}")
            return CompressionAttempt(ok=False, error=e)

        logger.debug(f"Compressed '{definition.token}' via '{summary_token}': {cost} tokens")
        return CompressionAttempt(
            ok=True,
            rendered=rendered,
            cost=cost,
            note=f"compressed via {summary_token}",
        )
