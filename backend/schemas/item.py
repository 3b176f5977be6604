# backend/schemas/item.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from schemas.base import ORMBase


# Client fields embedded in item responses
class ClientSummary(ORMBase):
    id: int
    client_code: str
    name: str
    phone: str


# Shared base attributes for item entities
class ItemBase(ORMBase):
    client_id: int
    product_code: str = Field(min_length=1)
    arrival_date: date
    quantity: int = Field(default=1, ge=1)
    weight: Optional[float] = Field(default=None, gt=0)
    price_usd: Optional[float] = Field(default=None, gt=0)
    exchange_rate: Optional[float] = Field(default=None, gt=0)
    # A supplied 0 is a legitimate override, hence ge instead of gt
    amount_kzt: Optional[float] = Field(default=None, ge=0)
    cost_price: Optional[float] = Field(default=None, ge=0)
    margin: Optional[float] = None
    notes: Optional[str] = None


# Schema for creating an item and for full (PUT) updates
class ItemCreate(ItemBase):
    pass


# Schema for partial item updates
class ItemUpdate(ORMBase):
    """Schema for PATCH requests - all fields optional."""
    client_id: Optional[int] = None
    product_code: Optional[str] = Field(default=None, min_length=1)
    arrival_date: Optional[date] = None
    quantity: Optional[int] = Field(default=None, ge=1)
    weight: Optional[float] = Field(default=None, gt=0)
    price_usd: Optional[float] = Field(default=None, gt=0)
    exchange_rate: Optional[float] = Field(default=None, gt=0)
    amount_kzt: Optional[float] = Field(default=None, ge=0)
    cost_price: Optional[float] = Field(default=None, ge=0)
    margin: Optional[float] = None
    notes: Optional[str] = None


# Full item representation
class ItemOut(ItemBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    client: Optional[ClientSummary] = None


# Paginated response for item listings
class ItemListPage(ORMBase):
    items: List[ItemOut]
    total: int
    page: int
    page_size: int
    total_pages: int
