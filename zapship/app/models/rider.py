"""
Rider database model.

Riders apply through the public form and are approved by an operator.
"""

from sqlalchemy import Column, Integer, String, DateTime, Enum
from zapship.app.models.clock import utcnow
from zapship.app.db.session import Base
from zapship.app.models.enums import RiderStatus


class Rider(Base):
    """Rider application and onboarding state."""
    __tablename__ = "riders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    name = Column(String(150), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    age = Column(Integer, nullable=True)
    phone = Column(String(30), nullable=True)
    region = Column(String(100), nullable=True)
    district = Column(String(100), nullable=True)
    nid = Column(String(50), nullable=True)
    bike_brand = Column(String(100), nullable=True)
    bike_registration = Column(String(50), nullable=True)

    status = Column(
        Enum(RiderStatus, values_callable=lambda e: [m.value for m in e]),
        default=RiderStatus.PENDING,
        nullable=False,
        index=True
    )

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Rider(id={self.id}, email='{self.email}', status='{self.status.value}')>"
