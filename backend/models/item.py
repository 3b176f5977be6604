# backend/models/item.py
from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# Model Item
# A consigned lot of cargo owned by one client.
# amount_kzt and margin are either supplied or derived on write (utils.ledger).
class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    product_code = Column(String, nullable=False, index=True)
    arrival_date = Column(Date, nullable=False, index=True)
    quantity = Column(Integer, CheckConstraint("quantity >= 1"), nullable=False, default=1)

    weight = Column(Float, nullable=True)

    # Money: USD price, USD->KZT rate, KZT amount, KZT cost and margin.
    price_usd = Column(Float, nullable=True)
    exchange_rate = Column(Float, nullable=True)
    amount_kzt = Column(Float, nullable=True)
    cost_price = Column(Float, nullable=True)
    margin = Column(Float, nullable=True)

    notes = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="items")
