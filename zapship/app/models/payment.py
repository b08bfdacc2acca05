"""
Payment ledger model.

Append-only: one row per completed provider transaction.
"""

from sqlalchemy import Column, Integer, String, Numeric, DateTime
from zapship.app.models.clock import utcnow
from zapship.app.db.session import Base


class Payment(Base):
    """
    Payment ledger entry.

    ``transaction_id`` is the provider's payment intent id and the
    idempotency key; the unique constraint lets a racing duplicate insert fail.
    NO updates or deletions allowed.
    """
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Financials, in major currency units
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(10), nullable=False)

    customer_email = Column(String(255), nullable=True, index=True)

    # Parcel snapshot
    parcel_id = Column(Integer, nullable=True, index=True)
    parcel_name = Column(String(200), nullable=True)
    tracking_id = Column(String(40), nullable=False, index=True)

    transaction_id = Column(String(255), unique=True, nullable=False, index=True)
    payment_status = Column(String(30), nullable=False)

    # Timestamps (Immutable - no updated_at)
    paid_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Payment(id={self.id}, transaction_id='{self.transaction_id}', amount={self.amount})>"
