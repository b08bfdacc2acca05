"""
Parcel database model.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Enum, Numeric
from zapship.app.models.clock import utcnow
from zapship.app.db.session import Base
from zapship.app.models.parcel_enums import ParcelType, PaymentStatus


class Parcel(Base):
    """
    Parcel booked by a sender.

    ``payment_status``, ``tracking_id`` and ``amount`` are written once, by
    payment finalization; everything else comes from the booking form.
    """
    __tablename__ = "parcels"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    parcel_type = Column(
        Enum(ParcelType, values_callable=lambda e: [m.value for m in e]),
        default=ParcelType.NON_DOCUMENT,
        nullable=False
    )
    parcel_name = Column(String(200), nullable=False)
    parcel_weight = Column(Float, nullable=True)

    # Sender
    sender_name = Column(String(150), nullable=True)
    sender_email = Column(String(255), nullable=False, index=True)
    sender_region = Column(String(100), nullable=True)
    sender_district = Column(String(100), nullable=True)
    sender_address = Column(String(500), nullable=True)

    # Receiver
    receiver_name = Column(String(150), nullable=True)
    receiver_email = Column(String(255), nullable=True)
    receiver_phone = Column(String(30), nullable=True)
    receiver_region = Column(String(100), nullable=True)
    receiver_district = Column(String(100), nullable=True)
    receiver_address = Column(String(500), nullable=True)

    # Pricing, in major currency units
    cost = Column(Numeric(12, 2), nullable=False)

    # Payment (unpaid -> paid)
    payment_status = Column(
        Enum(PaymentStatus, values_callable=lambda e: [m.value for m in e]),
        default=PaymentStatus.UNPAID,
        nullable=False,
        index=True
    )
    tracking_id = Column(String(40), unique=True, nullable=True, index=True)
    amount = Column(Numeric(12, 2), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Parcel(id={self.id}, name='{self.parcel_name}', payment_status='{self.payment_status.value}')>"
