# backend/models/exchange_rate.py
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, UniqueConstraint, CheckConstraint, func
from database import Base

# One rate per currency pair per day; writes for an existing day overwrite the rate
class ExchangeRate(Base):
    __tablename__ = "exchange_rates"
    __table_args__ = (
        UniqueConstraint("currency_from", "currency_to", "date", name="uq_exchange_rate_pair_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    currency_from = Column(String(3), nullable=False, default="USD")
    currency_to = Column(String(3), nullable=False, default="KZT")
    rate = Column(Float, CheckConstraint("rate > 0"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
