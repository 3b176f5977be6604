# backend/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy import func
from sqlalchemy.orm import Session

from database import get_db
from models.client import Client
from models.users import User
from schemas import user as schemas
from utils.audit import write_log, client_ip
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import get_current_user, token_for

router = APIRouter(prefix="/auth", tags=["Auth"])


# Register a new staff account
@router.post("/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    # Normalize email input
    normalized_email = payload.email.strip().lower()

    # Check for existing user
    db_user = db.query(User).filter(func.lower(User.email) == normalized_email).first()
    if db_user:
        write_log(
            db,
            user_id=None,
            action="REGISTER",
            resource="auth",
            status="FAIL",
            ip=client_ip(request),
            meta={"email": normalized_email, "reason": "User exists"},
        )
        raise HTTPException(status_code=400, detail="User already exists")

    new_user = User(
        email=normalized_email,
        password_hash=get_password_hash(payload.password),
        role=payload.role,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    write_log(
        db,
        user_id=new_user.id,
        action="REGISTER",
        resource="auth",
        ip=client_ip(request),
        meta={"email": new_user.email, "role": new_user.role},
    )

    return {"user": new_user, "token": token_for(new_user)}


# Authenticate staff user and issue JWT token
@router.post("/login", response_model=schemas.AuthResponse)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    email = payload.email.strip().lower()
    db_user = db.query(User).filter(func.lower(User.email) == email).first()

    # Validate credentials and log failure on error
    if not db_user or not verify_password(payload.password, db_user.password_hash):
        write_log(db, user_id=(db_user.id if db_user else None), action="LOGIN", resource="auth",
                  status="FAIL", ip=client_ip(request), meta={"email": email})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              ip=client_ip(request), meta={"email": db_user.email})

    return {"user": db_user, "token": token_for(db_user)}


# Client self-service login with client code + last 4 digits of the phone.
# The client's user account is created on first successful login.
@router.post("/client-login", response_model=schemas.ClientAuthResponse)
def client_login(payload: schemas.ClientLogin, request: Request, db: Session = Depends(get_db)):
    client = db.query(Client).filter(Client.client_code == payload.client_code).first()

    if not client or client.phone[-4:] != payload.phone_last4:
        write_log(db, user_id=None, action="CLIENT_LOGIN", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"client_code": payload.client_code})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    user = client.user
    if user is None:
        user = User(
            email=f"{client.client_code}@client.local",
            password_hash=get_password_hash(client.client_code + payload.phone_last4),
            role="client",
            client_id=client.id,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

    write_log(db, user_id=user.id, action="CLIENT_LOGIN", resource="auth",
              resource_id=client.id, ip=client_ip(request), meta={"client_code": client.client_code})

    return {"user": user, "client": client, "token": token_for(user)}


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
