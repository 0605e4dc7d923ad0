"""
Derived views: the cash flow type hierarchy, dashboard overview and trends.
"""

from .hierarchy import (
    HierarchyRow,
    build_forest,
    flatten,
    expandable_ids,
    descendant_ids,
    would_create_cycle,
    parent_candidates,
)
from .overview import overview_cards, department_ranking, budget_type_ranking
from .trends import (
    TrendDirection,
    TrendRow,
    percent_change,
    format_percent_change,
    format_period_label,
    build_trend_rows,
    trends_to_frame,
)

__all__ = [
    "HierarchyRow",
    "build_forest",
    "flatten",
    "expandable_ids",
    "descendant_ids",
    "would_create_cycle",
    "parent_candidates",
    "overview_cards",
    "department_ranking",
    "budget_type_ranking",
    "TrendDirection",
    "TrendRow",
    "percent_change",
    "format_percent_change",
    "format_period_label",
    "build_trend_rows",
    "trends_to_frame",
]
