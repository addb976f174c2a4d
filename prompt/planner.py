"""
Budget planner for prepared order items.

Rules:
- No budget: every item is included at its baseline cost and compressed
  fallbacks are never used.
- With a budget:
  - The first item (index 0) is always included, even if it alone exceeds the
    budget. Its compressed fallback is used only when strictly cheaper.
  - Remaining items are ranked by priority score (desc), then by their
    cheapest viable cost (asc), then by original index (asc). Each one is
    tried at baseline cost, then compressed, then dropped, against the
    running total so far.

The planner is greedy by priority; it does not re-optimize near fits.
"""

import logging
from typing import Dict, List, Optional

from core.interfaces import PlanDecision, PreparedItem

logger = logging.getLogger(__name__)

REASON_NO_BUDGET = "no budget provided"
REASON_FIRST = "first item is always included"
REASON_FIRST_COMPRESSED = "first item is always included (compressed to save budget)"
REASON_SELECTED = "selected by priority within budget"
REASON_COMPRESSED = "compressed to fit budget"
REASON_EXCLUDED = "excluded due to budget/priority"


def _ranking_key(item: PreparedItem):
    return (-item.priority_score, item.min_cost, item.index)


def rank_candidates(items: List[PreparedItem]) -> List[PreparedItem]:
    """Order non-forced candidates by priority, cheapest cost, then index"""
    return sorted(items, key=_ranking_key)


def plan_budget(items: List[PreparedItem], budget: Optional[int]) -> Dict[int, PlanDecision]:
    """
    Decide inclusion and representation for each prepared item.

    Args:
        items: Prepared items in original order
        budget: Token budget, or None for no limit

    Returns:
        Mapping of item index -> PlanDecision
    """
    plan: Dict[int, PlanDecision] = {}
    planned_total = 0

    if budget is None:
        for item in items:
            plan[item.index] = PlanDecision(
                include=True,
                forced=False,
                used_compressed=False,
                used_rendered=item.baseline_rendered,
                used_cost=item.baseline_cost,
                reason=REASON_NO_BUDGET,
            )
            planned_total += item.baseline_cost
        logger.debug(f"Planned {len(items)} items without budget: {planned_total} tokens")
        return plan

    if not items:
        return plan

    first = items[0]
    if first.has_compressed and first.compressed_cost < first.baseline_cost:
        decision = PlanDecision(
            include=True,
            forced=True,
            used_compressed=True,
            used_rendered=first.compressed_rendered,
            used_cost=first.compressed_cost,
            reason=REASON_FIRST_COMPRESSED,
        )
    else:
        decision = PlanDecision(
            include=True,
            forced=True,
            used_compressed=False,
            used_rendered=first.baseline_rendered,
            used_cost=first.baseline_cost,
            reason=REASON_FIRST,
        )
    plan[first.index] = decision
    planned_total += decision.used_cost

    for cand in rank_candidates(items[1:]):
        # Try baseline first.
        if planned_total + cand.baseline_cost <= budget:
            plan[cand.index] = PlanDecision(
                include=True,
                forced=False,
                used_compressed=False,
                used_rendered=cand.baseline_rendered,
                used_cost=cand.baseline_cost,
                reason=REASON_SELECTED,
            )
            planned_total += cand.baseline_cost
            continue

        # Then the compressed fallback, if available.
        if cand.has_compressed and planned_total + cand.compressed_cost <= budget:
            plan[cand.index] = PlanDecision(
                include=True,
                forced=False,
                used_compressed=True,
                used_rendered=cand.compressed_rendered,
                used_cost=cand.compressed_cost,
                reason=REASON_COMPRESSED,
            )
            planned_total += cand.compressed_cost
            continue

        plan[cand.index] = PlanDecision(
            include=False,
            forced=False,
            used_compressed=False,
            used_rendered=cand.baseline_rendered,
            used_cost=cand.min_cost,
            reason=REASON_EXCLUDED,
        )
        logger.debug(
            f"Dropped '{cand.token}' (baseline {cand.baseline_cost}, "
            f"compressed {cand.compressed_cost}) with {budget - planned_total} tokens left"
        )

    logger.debug(f"Planned {len(items)} items under budget {budget}: {planned_total} tokens")
    return plan
