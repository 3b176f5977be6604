# backend/routes/analytics.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.client import Client
from models.item import Item
from models.users import User
from schemas.analytics import AnalyticsReport
from utils.analytics import aggregate
from utils.tokenJWT import get_current_user, is_client

router = APIRouter(prefix="/analytics", tags=["Analytics"])


def _parse_date(s: Optional[str]) -> Optional[date]:
    if not s:
        return None
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Bad date format: {s}")


# Revenue/profit report over items whose arrival date is in [start_date, end_date]
@router.get("", response_model=AnalyticsReport)
def get_analytics(
    start_date: Optional[str] = Query(None, description="ISO date, inclusive"),
    end_date: Optional[str] = Query(None, description="ISO date, inclusive"),
    # the mobile app sends camelCase
    start_date_camel: Optional[str] = Query(None, alias="startDate", include_in_schema=False),
    end_date_camel: Optional[str] = Query(None, alias="endDate", include_in_schema=False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    start = _parse_date(start_date or start_date_camel)
    end = _parse_date(end_date or end_date_camel)
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    query = db.query(Item)
    # Client accounts only see their own consignments
    if is_client(current_user):
        query = query.filter(Item.client_id == current_user.client_id)
    if start:
        query = query.filter(Item.arrival_date >= start)
    if end:
        query = query.filter(Item.arrival_date <= end)
    items = query.all()

    client_ids = {i.client_id for i in items}
    clients = db.query(Client).filter(Client.id.in_(client_ids)).all() if client_ids else []

    return aggregate(
        items,
        clients,
        (start, end) if (start or end) else None,
        top_limit=settings.ANALYTICS_TOP_CLIENTS,
        months=settings.ANALYTICS_MONTHS,
    )
