"""
Audit trail API Endpoints (admin only).
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from zapship.app.db.session import get_db
from zapship.app.core.guards import require_admin
from zapship.app.schemas.auth import VerifiedIdentity
from zapship.app.schemas.audit import AuditLogResponse, AuditTrailResponse
from zapship.app.services.audit import get_audit_trail

router = APIRouter(prefix="/audit-logs", tags=["Audit"])


@router.get("", response_model=AuditTrailResponse)
async def list_audit_logs(
    subject_type: Optional[str] = Query(None, alias="subjectType", description="parcel, rider, payment, checkout_session, user"),
    subject_id: Optional[str] = Query(None, alias="subjectId"),
    action: Optional[str] = Query(None, description="Filter by action, e.g. PAYMENT_NOT_COMPLETED"),
    limit: int = Query(100, ge=1, le=500, description="Maximum records to return"),
    admin: VerifiedIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Recent audit entries, newest first.

    Abandoned checkouts and payments for missing parcels only show up here.
    """
    logs = await get_audit_trail(
        db=db,
        subject_type=subject_type,
        subject_id=subject_id,
        action=action,
        limit=limit
    )

    return AuditTrailResponse(
        logs=[AuditLogResponse.model_validate(log) for log in logs],
        total=len(logs)
    )
