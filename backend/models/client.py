# backend/models/client.py
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from database import Base

# Model Client
# A cargo customer. client_code is the business-facing key printed on
# consignments and used for client self-service login.
class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    client_code = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=False)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    items = relationship(
        "Item",
        back_populates="client",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Item.id.desc()",
    )
    user = relationship("User", back_populates="client", uselist=False, passive_deletes=True)
