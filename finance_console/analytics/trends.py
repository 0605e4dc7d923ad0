"""
Period-over-period trend rows for the dashboard.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Optional, Sequence

import pandas as pd

from ..models.dashboard import TrendPoint
from ..utils.currency_utils import CurrencyUtils

PERCENT_QUANTUM = Decimal("0.1")


class TrendDirection(str, Enum):
    """Arrow shown next to a period's change."""
    UP = "up"
    DOWN = "down"


def percent_change(current: Decimal, previous: Optional[Decimal]) -> Optional[Decimal]:
    """
    Unrounded percentage change from ``previous`` to ``current``.

    Returns None when there is no previous value or it is zero: the change is
    treated as 0 and no direction indicator is shown. This is how the first
    point of every trend series is rendered.
    """
    if previous is None or previous == 0:
        return None
    return (current - previous) / previous * 100


def change_direction(change: Optional[Decimal]) -> Optional[TrendDirection]:
    if change is None:
        return None
    return TrendDirection.UP if change >= 0 else TrendDirection.DOWN


def format_percent_change(change: Decimal) -> str:
    """Signed, one decimal place, half away from zero: ``+10.0%``."""
    rounded = change.quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)
    sign = "+" if change >= 0 else "-"
    return f"{sign}{abs(rounded)}%"


def format_period_label(period: str, granularity: str = "month") -> str:
    """Human label for a trend period key; unknown shapes are returned as-is."""
    try:
        if granularity == "month":
            year, month = period.split("-")[:2]
            return date(int(year), int(month), 1).strftime("%B %Y")
        if granularity == "day":
            return date.fromisoformat(period[:10]).strftime("%d %b %Y")
        if granularity == "week":
            year, week = period.split("-")[:2]
            return f"Week {int(week.lstrip('W'))}, {int(year)}"
        if granularity == "year":
            return str(int(period[:4]))
    except (ValueError, TypeError):
        pass
    return period


@dataclass(frozen=True)
class TrendRow:
    """Display data for one trend point."""
    point: TrendPoint
    label: str
    change: Optional[Decimal]
    direction: Optional[TrendDirection]

    @property
    def show_indicator(self) -> bool:
        return self.direction is not None

    @property
    def change_text(self) -> Optional[str]:
        return format_percent_change(self.change) if self.change is not None else None

    def formatted_amount(self, currency: str = "VND") -> str:
        return CurrencyUtils.format_amount(self.point.total_amount, currency)


def build_trend_rows(points: Sequence[TrendPoint], granularity: str = "month") -> List[TrendRow]:
    """One row per point, in the order the server returned them."""
    rows: List[TrendRow] = []
    previous: Optional[Decimal] = None

    for point in points:
        change = percent_change(point.total_amount, previous)
        rows.append(
            TrendRow(
                point=point,
                label=format_period_label(point.period, granularity),
                change=change,
                direction=change_direction(change),
            )
        )
        previous = point.total_amount

    return rows


def trends_to_frame(rows: Sequence[TrendRow]) -> pd.DataFrame:
    """DataFrame for the trend chart and table.

    Amounts are converted to float here only for plotting.
    """
    if not rows:
        return pd.DataFrame(columns=["period", "label", "total_amount", "transaction_count", "change_pct"])

    return pd.DataFrame(
        {
            "period": [row.point.period for row in rows],
            "label": [row.label for row in rows],
            "total_amount": [float(row.point.total_amount) for row in rows],
            "transaction_count": [row.point.transaction_count for row in rows],
            "change_pct": [float(row.change) if row.change is not None else None for row in rows],
        }
    )
