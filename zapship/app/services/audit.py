"""
Audit logging service for tracking business events.

Provides a single append-only trail for parcel, rider and payment activity.
"""

from typing import Optional, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from zapship.app.models.audit_log import AuditLog


class AuditAction:
    """Standardized audit action constants."""
    USER_CREATED = "USER_CREATED"
    TOKEN_REVOKED = "TOKEN_REVOKED"

    PARCEL_CREATED = "PARCEL_CREATED"
    PARCEL_DELETED = "PARCEL_DELETED"

    RIDER_APPLIED = "RIDER_APPLIED"
    RIDER_STATUS_CHANGED = "RIDER_STATUS_CHANGED"

    CHECKOUT_STARTED = "CHECKOUT_STARTED"
    PAYMENT_RECORDED = "PAYMENT_RECORDED"
    PAYMENT_NOT_COMPLETED = "PAYMENT_NOT_COMPLETED"
    PAYMENT_PARCEL_MISSING = "PAYMENT_PARCEL_MISSING"


async def log_event(
    db: AsyncSession,
    action: str,
    actor_email: Optional[str] = None,
    subject_type: Optional[str] = None,
    subject_id: Optional[Any] = None,
    metadata: Optional[Dict[str, Any]] = None,
    commit: bool = True
) -> AuditLog:
    """
    Record an event in the audit log.

    Args:
        db: Database session
        action: Action being performed (use AuditAction constants)
        actor_email: Email of the user performing the action, if known
        subject_type: Kind of record acted upon ("parcel", "rider", "payment", ...)
        subject_id: Identifier of that record
        metadata: Additional context as JSON
        commit: Commit immediately; pass False to join the caller's transaction

    Returns:
        Created AuditLog instance
    """
    audit_log = AuditLog(
        action=action,
        actor_email=actor_email,
        subject_type=subject_type,
        subject_id=str(subject_id) if subject_id is not None else None,
        meta_data=metadata
    )

    db.add(audit_log)
    if commit:
        await db.commit()

    return audit_log


async def get_audit_trail(
    db: AsyncSession,
    subject_type: Optional[str] = None,
    subject_id: Optional[Any] = None,
    action: Optional[str] = None,
    limit: int = 100
) -> list[AuditLog]:
    """
    Retrieve audit trail with optional filtering, most recent first.
    """
    query = select(AuditLog).order_by(desc(AuditLog.timestamp), desc(AuditLog.id))

    if subject_type:
        query = query.where(AuditLog.subject_type == subject_type)

    if subject_id is not None:
        query = query.where(AuditLog.subject_id == str(subject_id))

    if action:
        query = query.where(AuditLog.action == action)

    query = query.limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all())
