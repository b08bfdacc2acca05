"""
Parcel enumerations.
"""

import enum


class ParcelType(str, enum.Enum):
    """Kind of shipment, drives pricing on the client."""
    DOCUMENT = "document"
    NON_DOCUMENT = "non-document"


class PaymentStatus(str, enum.Enum):
    """
    Parcel payment status.

    Status flow:
        UNPAID -> PAID (terminal, set once by payment finalization)
    """
    UNPAID = "unpaid"
    PAID = "paid"
