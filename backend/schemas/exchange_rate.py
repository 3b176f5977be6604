# backend/schemas/exchange_rate.py
import datetime as dt
from typing import Optional

from pydantic import Field, field_validator

from schemas.base import ORMBase


class ExchangeRateCreate(ORMBase):
    currency_from: str = Field(default="USD", min_length=3, max_length=3)
    currency_to: str = Field(default="KZT", min_length=3, max_length=3)
    rate: float = Field(gt=0)
    date: dt.date

    @field_validator("currency_from", "currency_to")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()


class ExchangeRateOut(ORMBase):
    id: int
    currency_from: str
    currency_to: str
    rate: float
    date: dt.date
    created_at: Optional[dt.datetime] = None
