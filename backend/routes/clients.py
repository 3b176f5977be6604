# backend/routes/clients.py
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_db
from models.client import Client
from models.item import Item
from models.users import User
from schemas.client import ClientCreate, ClientDetail, ClientListPage, ClientOut, ClientUpdate
from utils.audit import write_log, client_ip
from utils.tokenJWT import get_current_user, is_staff, require_staff

router = APIRouter(prefix="/clients", tags=["Clients"])
logger = logging.getLogger(__name__)

DUPLICATE_CODE = "Client code already exists"


def _code_taken(db: Session, code: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Client.id).filter(Client.client_code == code)
    if exclude_id is not None:
        query = query.filter(Client.id != exclude_id)
    return query.first() is not None


def _get_or_404(db: Session, client_id: int) -> Client:
    client = db.query(Client).filter(Client.id == client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


def _reject_duplicate(db: Session, request: Request, user: User, code: str, action: str):
    write_log(db, user_id=user.id, action=action, resource="client", status="FAIL",
              ip=client_ip(request), meta={"client_code": code, "reason": DUPLICATE_CODE})
    raise HTTPException(status_code=400, detail=DUPLICATE_CODE)


# =========================
# LIST
# =========================
@router.get("", response_model=ClientListPage)
def list_clients(
    search: Optional[str] = Query(None, description="Name, client code or phone"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=100, description="Defaults to 20"),
    # the mobile app pages with ?limit=
    limit: Optional[int] = Query(None, ge=1, le=100, include_in_schema=False),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    page_size = page_size or limit or 20

    counts = (
        db.query(Item.client_id, func.count(Item.id).label("items_count"))
        .group_by(Item.client_id)
        .subquery()
    )
    query = (
        db.query(Client, func.coalesce(counts.c.items_count, 0))
        .outerjoin(counts, counts.c.client_id == Client.id)
    )

    if search:
        like = f"%{search.strip()}%"
        query = query.filter(or_(
            Client.name.ilike(like),
            Client.client_code.ilike(like),
            Client.phone.ilike(like),
        ))

    total = query.count()
    rows = (query
            .order_by(Client.created_at.desc(), Client.id.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all())

    items = []
    for client, items_count in rows:
        out = ClientOut.model_validate(client)
        out.items_count = items_count
        items.append(out)

    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": math.ceil(total / page_size),
    }


# =========================
# DETAIL
# =========================
@router.get("/{client_id}", response_model=ClientDetail)
def get_client(
    client_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # Client accounts may only look at themselves
    if not is_staff(current_user) and current_user.client_id != client_id:
        raise HTTPException(status_code=404, detail="Client not found")

    client = _get_or_404(db, client_id)
    out = ClientDetail.model_validate(client)
    out.items_count = len(out.items)
    return out


# =========================
# CREATE / UPDATE / DELETE
# =========================
@router.post("", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    if _code_taken(db, payload.client_code):
        _reject_duplicate(db, request, current_user, payload.client_code, "CLIENT_CREATE")

    client = Client(**payload.model_dump())
    db.add(client)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race on the unique index
        db.rollback()
        _reject_duplicate(db, request, current_user, payload.client_code, "CLIENT_CREATE")
    db.refresh(client)

    write_log(db, user_id=current_user.id, action="CLIENT_CREATE", resource="client",
              resource_id=client.id, ip=client_ip(request), meta={"client_code": client.client_code})
    return client


@router.put("/{client_id}", response_model=ClientOut)
def update_client(
    client_id: int,
    payload: ClientUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    client = _get_or_404(db, client_id)

    if _code_taken(db, payload.client_code, exclude_id=client_id):
        _reject_duplicate(db, request, current_user, payload.client_code, "CLIENT_UPDATE")

    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(client, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        _reject_duplicate(db, request, current_user, payload.client_code, "CLIENT_UPDATE")
    db.refresh(client)

    write_log(db, user_id=current_user.id, action="CLIENT_UPDATE", resource="client",
              resource_id=client.id, ip=client_ip(request), meta={"fields": sorted(changes)})
    return client


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(
    client_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    client = _get_or_404(db, client_id)
    code = client.client_code

    # Items go with the client (ORM cascade + ON DELETE CASCADE)
    db.delete(client)
    db.commit()
    logger.info("Deleted client %s (%s)", client_id, code)

    write_log(db, user_id=current_user.id, action="CLIENT_DELETE", resource="client",
              resource_id=client_id, ip=client_ip(request), meta={"client_code": code})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
