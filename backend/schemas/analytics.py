# backend/schemas/analytics.py
from typing import List
from schemas.base import ORMBase


# Totals over every item in the selected period
class AnalyticsSummary(ORMBase):
    total_revenue: float = 0
    total_cost: float = 0
    total_profit: float = 0
    average_margin: float = 0
    total_items: int = 0
    total_weight: float = 0
    unique_clients: int = 0

# One row of the top clients ranking
class TopClient(ORMBase):
    client_id: int
    client_name: str
    client_code: str
    revenue: float
    items_count: int

# Revenue/profit for one calendar month ("YYYY-MM")
class MonthlyData(ORMBase):
    month: str
    revenue: float
    profit: float
    items_count: int

class AnalyticsReport(ORMBase):
    summary: AnalyticsSummary
    top_clients: List[TopClient]
    monthly_data: List[MonthlyData]
