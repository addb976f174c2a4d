"""
Text rendering for plated context.

This module turns prepared values into the text that gets priced and plated,
and formats explained cook results into a readable audit report.
"""

import dataclasses
import json
from typing import Any

from core.interfaces import CookResult, PlateInfo


# Separator placed after every plated rendering
PLATE_SEPARATOR = "\n"

# Header for the plate audit report
PLATE_REPORT_HEADER = """PLATES (budget: {budget}, total tokens: {total_tokens})"""

# One line per plate in the audit report
PLATE_LINE_TEMPLATE = (
    "{position:>2}. {token} [{decision}] {detail} "
    "priority={priority} cost={cost} ({before} -> {after}) - {reason}"
)


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return model_dump()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    return str(value)


def render_value(value: Any) -> str:
    """
    Render a prepared value as text.

    Args:
        value: Any prepared value

    Returns:
        The value itself for strings, compact JSON otherwise

    Examples:
        >>> render_value("hello")
        'hello'
        >>> render_value({"a": [1, 2]})
        '{"a":[1,2]}'
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=_json_default)


def join_plates(renderings) -> str:
    """Join plated renderings, each followed by the plate separator"""
    return "\n".join(rendered + PLATE_SEPARATOR for rendered in renderings)


def format_plate(position: int, plate: PlateInfo) -> str:
    """Format one plate as a single report line"""
    detail = plate.served_detail
    if plate.was_compressed and plate.compression_note:
        detail = f"{detail}, {plate.compression_note}"
    return PLATE_LINE_TEMPLATE.format(
        position=position,
        token=plate.token,
        decision=plate.decision,
        detail=f"({detail})",
        priority=plate.priority_score,
        cost=plate.cost,
        before=plate.running_total_before,
        after=plate.running_total_after,
        reason=plate.reason,
    )


def format_plate_report(result: CookResult) -> str:
    """
    Format an explained cook result as a human-readable report.

    Each plate line is followed by its lineage, one provider per line.
    """
    budget = result.budget if result.budget is not None else "none"
    lines = [PLATE_REPORT_HEADER.format(budget=budget, total_tokens=result.total_tokens)]
    for position, plate in enumerate(result.plates, start=1):
        lines.append(format_plate(position, plate))
        for entry in plate.lineage:
            deps = ", ".join(dep.via for dep in entry.deps) or "-"
            lines.append(f"      {entry.token} <- {entry.provider_name}: {deps}")
    return "\n".join(lines)
