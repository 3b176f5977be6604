# backend/schemas/client.py
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from schemas.base import ORMBase
from schemas.item import ItemBase


class ClientBase(ORMBase):
    client_code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: Optional[EmailStr] = None
    address: Optional[str] = None


# Create and PUT share the same required fields
class ClientCreate(ClientBase):
    pass


class ClientUpdate(ClientBase):
    pass


class ClientOut(ClientBase):
    id: int
    # Stored e-mails are not re-validated on the way out
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items_count: Optional[int] = None


# Item row nested inside a client detail response
class ClientItem(ItemBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ClientDetail(ClientOut):
    items: List[ClientItem] = []


class ClientListPage(ORMBase):
    items: List[ClientOut]
    total: int
    page: int
    page_size: int
    total_pages: int
