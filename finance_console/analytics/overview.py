"""
Overview cards and rankings for the dashboard.
"""

from typing import List, Tuple

import pandas as pd

from ..models.dashboard import DashboardOverview
from ..utils.currency_utils import CurrencyUtils

RANKING_COLUMNS = ["rank", "name", "code", "total_amount", "amount", "transaction_count"]


def overview_cards(overview: DashboardOverview, currency: str = "VND") -> List[Tuple[str, str]]:
    """(title, value) pairs for the headline metric cards."""
    totals = overview.overview
    return [
        ("Total transactions", f"{totals.total_transactions:,}"),
        ("Total amount", CurrencyUtils.format_amount(totals.total_amount, currency)),
        ("Active departments", str(overview.active_departments)),
        ("Budget types used", str(overview.budget_types_used)),
    ]


def department_ranking(overview: DashboardOverview, limit: int = 5, currency: str = "VND") -> pd.DataFrame:
    """Top departments in the server's ranking order."""
    stats = overview.top_departments(limit)
    return pd.DataFrame(
        [
            {
                "rank": index,
                "name": stat.department_name,
                "code": stat.department_code,
                "total_amount": float(stat.total_amount),
                "amount": CurrencyUtils.format_amount(stat.total_amount, currency),
                "transaction_count": stat.transaction_count,
            }
            for index, stat in enumerate(stats, start=1)
        ],
        columns=RANKING_COLUMNS,
    )


def budget_type_ranking(overview: DashboardOverview, currency: str = "VND") -> pd.DataFrame:
    """Every budget type with bookings, in the server's ranking order."""
    return pd.DataFrame(
        [
            {
                "rank": index,
                "name": stat.budget_type_name,
                "code": "",
                "total_amount": float(stat.total_amount),
                "amount": CurrencyUtils.format_amount(stat.total_amount, currency),
                "transaction_count": stat.transaction_count,
            }
            for index, stat in enumerate(overview.budget_type_stats, start=1)
        ],
        columns=RANKING_COLUMNS,
    )
