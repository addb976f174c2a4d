"""
Default priority ranking.

Numeric priority tags are used as-is, well-known strings map through
``config.PRIORITY_TAG_SCORES`` (case-insensitive) and anything else,
including pantry tokens with no tag, gets ``config.DEFAULT_PRIORITY_SCORE``.
"""

from numbers import Number

import config
from core.interfaces import PriorityInfo


def default_rank_priority(info: PriorityInfo) -> float:
    tag = info.priority_tag
    if isinstance(tag, Number) and not isinstance(tag, bool):
        return tag
    if isinstance(tag, str):
        score = config.PRIORITY_TAG_SCORES.get(tag.strip().lower())
        if score is not None:
            return score
    # pantry / unknown / unset
    return config.DEFAULT_PRIORITY_SCORE
