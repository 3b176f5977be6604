# backend/schemas/user.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from schemas.base import ORMBase
from schemas.client import ClientOut


# Schema for staff registration requests
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    role: Literal["admin", "user"] = "user"

# Schema for user authentication credentials
class UserLogin(BaseModel):
    email: str
    password: str

# Client self-service login: client code plus the last 4 digits of the phone
class ClientLogin(ORMBase):
    client_code: str = Field(min_length=1)
    phone_last4: str = Field(min_length=4, max_length=4)

# Output schema for user profile details
class UserResponse(ORMBase):
    id: int
    # Client accounts use <code>@client.local, not a deliverable address
    email: str
    role: str
    client_id: Optional[int] = None
    created_at: Optional[datetime] = None

# Token plus the authenticated user
class AuthResponse(ORMBase):
    user: UserResponse
    token: str
    token_type: str = "bearer"

class ClientAuthResponse(AuthResponse):
    client: ClientOut

