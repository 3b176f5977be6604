# backend/utils/analytics.py
"""Revenue / profit analytics over item rows.

Everything here works on rows the caller already fetched (ORM objects or
anything exposing the same attributes); no database access.
Missing numbers count as 0 in sums, but items without a margin are left
out of the average margin entirely.
"""
from collections import defaultdict
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from schemas.analytics import AnalyticsReport, AnalyticsSummary, MonthlyData, TopClient

TOP_CLIENTS_LIMIT = 5
MONTHS_LIMIT = 6
UNKNOWN = "Unknown"

DateRange = Tuple[Optional[date], Optional[date]]


def _num(value) -> float:
    return 0 if value is None else value


def as_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def month_key(value: Union[date, datetime, str]) -> str:
    d = as_date(value)
    return f"{d.year:04d}-{d.month:02d}"


def filter_by_date(items: Iterable, date_range: Optional[DateRange]) -> list:
    """Keep items whose arrival_date is inside the inclusive range.

    Either bound may be None (open on that side).
    """
    items = list(items)
    if not date_range:
        return items

    start, end = date_range
    kept = []
    for item in items:
        d = as_date(item.arrival_date)
        if start is not None and d < start:
            continue
        if end is not None and d > end:
            continue
        kept.append(item)
    return kept


def summarize(items: Sequence) -> AnalyticsSummary:
    total_revenue = sum((_num(i.amount_kzt) for i in items), 0.0)
    total_cost = sum((_num(i.cost_price) for i in items), 0.0)
    total_weight = sum((_num(i.weight) for i in items), 0.0)

    margins = [i.margin for i in items if i.margin is not None]
    average_margin = sum(margins) / len(margins) if margins else 0

    return AnalyticsSummary(
        total_revenue=total_revenue,
        total_cost=total_cost,
        total_profit=total_revenue - total_cost,
        average_margin=average_margin,
        total_items=len(items),
        total_weight=total_weight,
        unique_clients=len({i.client_id for i in items}),
    )


def top_clients(items: Sequence, clients: Iterable, limit: int = TOP_CLIENTS_LIMIT) -> List[TopClient]:
    """Clients ranked by revenue, highest first; ties go to the lower client id."""
    revenue: Dict[int, float] = defaultdict(float)
    counts: Dict[int, int] = defaultdict(int)
    for item in items:
        revenue[item.client_id] += _num(item.amount_kzt)
        counts[item.client_id] += 1

    roster = {c.id: c for c in clients}
    ranked = sorted(revenue, key=lambda cid: (-revenue[cid], cid))[:limit]

    result = []
    for cid in ranked:
        client = roster.get(cid)
        result.append(TopClient(
            client_id=cid,
            client_name=client.name if client else UNKNOWN,
            client_code=client.client_code if client else UNKNOWN,
            revenue=revenue[cid],
            items_count=counts[cid],
        ))
    return result


def monthly_series(items: Sequence, months: int = MONTHS_LIMIT) -> List[MonthlyData]:
    """Per-month revenue and profit, oldest first, keeping the latest ``months`` entries.

    Profit is summed per item (amount - cost), not derived from the totals.
    """
    buckets: Dict[str, dict] = {}
    for item in items:
        key = month_key(item.arrival_date)
        bucket = buckets.setdefault(key, {"month": key, "revenue": 0.0, "profit": 0.0, "items_count": 0})
        bucket["revenue"] += _num(item.amount_kzt)
        bucket["profit"] += _num(item.amount_kzt) - _num(item.cost_price)
        bucket["items_count"] += 1

    ordered = [buckets[k] for k in sorted(buckets)]
    if months <= 0:
        return []
    return [MonthlyData(**b) for b in ordered[-months:]]


def aggregate(
    items: Iterable,
    clients: Iterable,
    date_range: Optional[DateRange] = None,
    *,
    top_limit: int = TOP_CLIENTS_LIMIT,
    months: int = MONTHS_LIMIT,
) -> AnalyticsReport:
    selected = filter_by_date(items, date_range)
    return AnalyticsReport(
        summary=summarize(selected),
        top_clients=top_clients(selected, clients, limit=top_limit),
        monthly_data=monthly_series(selected, months=months),
    )
