"""
Tracking ID issuance.

Format: ``PREFIX-YYYYMMDD-XXXXXX`` where the date is the current UTC date and
``XXXXXX`` is 24 bits of ``secrets`` randomness, upper-case hex.
"""

import logging
import re
import secrets
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import select, union_all
from sqlalchemy.ext.asyncio import AsyncSession

from zapship.app.core.exceptions import TrackingIdExhaustedError
from zapship.app.models.parcel import Parcel
from zapship.app.models.payment import Payment

logger = logging.getLogger(__name__)

TOKEN_BYTES = 3
DEFAULT_MAX_ATTEMPTS = 5


def generate_tracking_id(prefix: str = "ZAP", now: Optional[datetime] = None) -> str:
    """Build a tracking id for ``now`` (defaults to the current UTC time)."""
    now = now or datetime.now(timezone.utc)
    date = now.astimezone(timezone.utc).strftime("%Y%m%d")
    token = secrets.token_hex(TOKEN_BYTES).upper()
    return f"{prefix}-{date}-{token}"


def tracking_id_pattern(prefix: str = "ZAP") -> re.Pattern:
    return re.compile(rf"^{re.escape(prefix)}-\d{{8}}-[0-9A-F]{{{TOKEN_BYTES * 2}}}$")


async def tracking_id_in_use(db: AsyncSession, tracking_id: str) -> bool:
    query = union_all(
        select(Payment.id).where(Payment.tracking_id == tracking_id),
        select(Parcel.id).where(Parcel.tracking_id == tracking_id),
    ).limit(1)
    result = await db.execute(query)
    return result.first() is not None


async def issue_tracking_id(
    db: AsyncSession,
    prefix: str = "ZAP",
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
) -> str:
    """
    Generate a tracking id that no parcel or ledger entry uses yet.

    Raises:
        TrackingIdExhaustedError: every candidate collided
    """
    for attempt in range(1, max_attempts + 1):
        candidate = generate_tracking_id(prefix)
        if not await tracking_id_in_use(db, candidate):
            return candidate
        logger.warning("Tracking id collision on attempt %d: %s", attempt, candidate)

    raise TrackingIdExhaustedError(max_attempts)
