"""
Audit Log Database Model.

Tracks business events on parcels, riders and payments, including checkout
sessions that never reached the ledger.
"""

from sqlalchemy import Column, Integer, String, DateTime, JSON
from zapship.app.db.session import Base
from zapship.app.models.clock import utcnow


class AuditLog(Base):
    """
    Audit log model.

    Events logged:
    - USER_CREATED
    - PARCEL_CREATED / PARCEL_DELETED
    - RIDER_APPLIED / RIDER_STATUS_CHANGED
    - CHECKOUT_STARTED
    - PAYMENT_RECORDED / PAYMENT_NOT_COMPLETED / PAYMENT_PARCEL_MISSING
    - TOKEN_REVOKED
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Who performed the action (None for anonymous or provider-driven actions)
    actor_email = Column(String(255), index=True, nullable=True)

    # What action was performed
    action = Column(String(100), nullable=False, index=True)

    # What it was performed on
    subject_type = Column(String(50), nullable=True)
    subject_id = Column(String(255), index=True, nullable=True)

    # Additional context (JSON for flexibility)
    meta_data = Column(JSON, nullable=True)

    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<AuditLog(id={self.id}, action='{self.action}', subject={self.subject_type}:{self.subject_id})>"
