"""
Budgeting helpers for cooked context.

This package provides token counting, priority ranking, the budget planner
and text rendering used when plating context.
"""

from .tokens import TokenCounter, TiktokenTokenizer, tiktoken_tokenizer
from .priority import default_rank_priority
from .planner import plan_budget, rank_candidates
from .templates import render_value, join_plates, format_plate_report

__all__ = [
    'TokenCounter',
    'TiktokenTokenizer',
    'tiktoken_tokenizer',
    'default_rank_priority',
    'plan_budget',
    'rank_candidates',
    'render_value',
    'join_plates',
    'format_plate_report',
]
