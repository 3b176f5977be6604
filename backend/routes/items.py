# backend/routes/items.py
import logging
import math
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from database import get_db
from models.client import Client
from models.item import Item
from models.users import User
from schemas.item import ItemCreate, ItemListPage, ItemOut, ItemUpdate
from utils.audit import write_log, client_ip
from utils.ledger import derive
from utils.tokenJWT import get_current_user, is_client, require_staff

router = APIRouter(prefix="/items", tags=["Items"])
logger = logging.getLogger(__name__)

# Columns that can be omitted from a PATCH but never cleared
NOT_NULL_FIELDS = ("client_id", "product_code", "arrival_date", "quantity")


# ---- HELPERS ----
def _visible(db: Session, user: User):
    """Items the user may see: everything for staff, own items for client accounts."""
    query = db.query(Item).options(joinedload(Item.client))
    if is_client(user):
        query = query.filter(Item.client_id == user.client_id)
    return query


def _get_or_404(db: Session, item_id: int, user: User) -> Item:
    item = _visible(db, user).filter(Item.id == item_id).first()
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


def _ensure_client(db: Session, request: Request, user: User, client_id: int, action: str):
    if db.query(Client.id).filter(Client.id == client_id).first() is None:
        write_log(db, user_id=user.id, action=action, resource="item", status="FAIL",
                  ip=client_ip(request), meta={"client_id": client_id, "reason": "Client not found"})
        raise HTTPException(status_code=400, detail="Client not found")


def _commit(db: Session, what: str):
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to save %s", what)
        raise


def _apply(db: Session, request: Request, user: User, item: Item, fields: Dict[str, Any], action: str) -> Item:
    for name in NOT_NULL_FIELDS:
        if name in fields and fields[name] is None:
            raise HTTPException(status_code=400, detail=f"{name} cannot be null")

    if "client_id" in fields and fields["client_id"] != item.client_id:
        _ensure_client(db, request, user, fields["client_id"], action)

    for name, value in fields.items():
        setattr(item, name, value)
    _commit(db, "item %s" % item.id)
    db.refresh(item)

    write_log(db, user_id=user.id, action=action, resource="item", resource_id=item.id,
              ip=client_ip(request), meta={"fields": sorted(fields)})
    return item


# =========================
# LIST / DETAIL
# =========================
@router.get("", response_model=ItemListPage)
def list_items(
    client_id: Optional[int] = Query(None),
    product_code: Optional[str] = Query(None, description="Substring of the product code"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=100, description="Defaults to 20"),
    # camelCase spellings used by the mobile app
    client_id_camel: Optional[int] = Query(None, alias="clientId", include_in_schema=False),
    product_code_camel: Optional[str] = Query(None, alias="productCode", include_in_schema=False),
    limit: Optional[int] = Query(None, ge=1, le=100, include_in_schema=False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    client_id = client_id if client_id is not None else client_id_camel
    product_code = product_code or product_code_camel
    page_size = page_size or limit or 20

    query = _visible(db, current_user)
    if client_id is not None:
        query = query.filter(Item.client_id == client_id)
    if product_code:
        query = query.filter(Item.product_code.ilike(f"%{product_code}%"))

    total = query.count()
    items = (query
             .order_by(Item.created_at.desc(), Item.id.desc())
             .offset((page - 1) * page_size)
             .limit(page_size)
             .all())

    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": math.ceil(total / page_size),
    }


@router.get("/{item_id}", response_model=ItemOut)
def get_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _get_or_404(db, item_id, current_user)


# =========================
# CREATE / UPDATE / DELETE
# =========================
@router.post("", response_model=ItemOut, status_code=status.HTTP_201_CREATED)
def create_item(
    payload: ItemCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Create an item, filling amountKzt and margin from the supplied fields.

    A field sent as JSON null counts as not supplied, so it is derived when
    its inputs are present.
    """
    _ensure_client(db, request, current_user, payload.client_id, "ITEM_CREATE")

    fields = derive(payload.model_dump(exclude_unset=True))
    item = Item(**fields)
    db.add(item)
    _commit(db, "new item for client %s" % payload.client_id)
    db.refresh(item)

    write_log(db, user_id=current_user.id, action="ITEM_CREATE", resource="item", resource_id=item.id,
              ip=client_ip(request), meta={"client_id": item.client_id, "product_code": item.product_code})
    return item


@router.put("/{item_id}", response_model=ItemOut)
def replace_item(
    item_id: int,
    payload: ItemCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Validated like a create, but only the fields in the body are written."""
    item = _get_or_404(db, item_id, current_user)
    fields = derive(payload.model_dump(exclude_unset=True))
    return _apply(db, request, current_user, item, fields, "ITEM_UPDATE")


@router.patch("/{item_id}", response_model=ItemOut)
def update_item(
    item_id: int,
    payload: ItemUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Partial update.

    Only what this request carries takes part in the derivation; stored
    values are never used. A JSON null counts as absent for derivation,
    so `{"amountKzt": null, "priceUsd": 2, "exchangeRate": 3}` stores 6.
    A null with nothing to derive it from clears the column.
    """
    item = _get_or_404(db, item_id, current_user)
    fields = derive(payload.model_dump(exclude_unset=True))
    return _apply(db, request, current_user, item, fields, "ITEM_UPDATE")


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    item = _get_or_404(db, item_id, current_user)
    db.delete(item)
    _commit(db, "deletion of item %s" % item_id)
    logger.info("Deleted item %s", item_id)

    write_log(db, user_id=current_user.id, action="ITEM_DELETE", resource="item",
              resource_id=item_id, ip=client_ip(request))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
