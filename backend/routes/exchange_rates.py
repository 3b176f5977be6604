# backend/routes/exchange_rates.py
import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from models.exchange_rate import ExchangeRate
from models.users import User
from schemas.exchange_rate import ExchangeRateCreate, ExchangeRateOut
from utils.audit import write_log, client_ip
from utils.tokenJWT import get_current_user, require_staff

router = APIRouter(prefix="/exchange-rates", tags=["Exchange rates"])
logger = logging.getLogger(__name__)


def currency_pair(
    currency_from: Optional[str] = Query(None, min_length=3, max_length=3, description="Defaults to USD"),
    currency_to: Optional[str] = Query(None, min_length=3, max_length=3, description="Defaults to KZT"),
    currency_from_camel: Optional[str] = Query(None, alias="currencyFrom", min_length=3, max_length=3,
                                               include_in_schema=False),
    currency_to_camel: Optional[str] = Query(None, alias="currencyTo", min_length=3, max_length=3,
                                             include_in_schema=False),
) -> Tuple[str, str]:
    """Currency pair from the query string, snake_case or camelCase."""
    return (
        (currency_from or currency_from_camel or "USD").upper(),
        (currency_to or currency_to_camel or "KZT").upper(),
    )


def _pair(query, currency_from: str, currency_to: str):
    return query.filter(
        ExchangeRate.currency_from == currency_from.upper(),
        ExchangeRate.currency_to == currency_to.upper(),
    )


def _find(db: Session, payload: ExchangeRateCreate) -> Optional[ExchangeRate]:
    return (_pair(db.query(ExchangeRate), payload.currency_from, payload.currency_to)
            .filter(ExchangeRate.date == payload.date)
            .first())


# Recent rates for a currency pair, newest first
@router.get("", response_model=List[ExchangeRateOut])
def list_rates(
    pair: Tuple[str, str] = Depends(currency_pair),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return (_pair(db.query(ExchangeRate), *pair)
            .order_by(ExchangeRate.date.desc())
            .limit(limit)
            .all())


@router.get("/latest", response_model=ExchangeRateOut)
def latest_rate(
    pair: Tuple[str, str] = Depends(currency_pair),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rate = (_pair(db.query(ExchangeRate), *pair)
            .order_by(ExchangeRate.date.desc())
            .first())
    if not rate:
        raise HTTPException(status_code=404, detail="Exchange rate not found")
    return rate


# Upsert: one rate per pair per day. 201 when created, 200 when overwritten.
@router.post("", response_model=ExchangeRateOut, status_code=status.HTTP_201_CREATED)
def save_rate(
    payload: ExchangeRateCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    rate = _find(db, payload)

    if rate:
        rate.rate = payload.rate
        action = "RATE_UPDATE"
        response.status_code = status.HTTP_200_OK
    else:
        rate = ExchangeRate(**payload.model_dump())
        db.add(rate)
        action = "RATE_CREATE"

    try:
        db.commit()
    except IntegrityError:
        # Another request stored this pair and day first; overwrite its rate
        db.rollback()
        rate = _find(db, payload)
        if rate is None:
            logger.exception("Saving rate %s/%s for %s failed",
                             payload.currency_from, payload.currency_to, payload.date)
            raise
        rate.rate = payload.rate
        action = "RATE_UPDATE"
        response.status_code = status.HTTP_200_OK
        db.commit()
    db.refresh(rate)
    logger.info("%s %s/%s %s = %s", action, rate.currency_from, rate.currency_to, rate.date, rate.rate)

    write_log(db, user_id=current_user.id, action=action, resource="exchange_rate", resource_id=rate.id,
              ip=client_ip(request),
              meta={"pair": f"{rate.currency_from}/{rate.currency_to}", "date": rate.date.isoformat(), "rate": rate.rate})
    return rate
