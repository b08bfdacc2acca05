"""
Rider Onboarding API Endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from zapship.app.db.session import get_db
from zapship.app.models.rider import Rider
from zapship.app.models.user import User
from zapship.app.models.enums import RiderStatus, UserRole
from zapship.app.schemas.auth import VerifiedIdentity
from zapship.app.schemas.rider import RiderCreate, RiderStatusUpdate, RiderResponse
from zapship.app.core.guards import require_admin
from zapship.app.core.exceptions import ResourceNotFoundError
from zapship.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/riders", tags=["Riders"])


@router.get("", response_model=List[RiderResponse])
async def list_riders(
    status_filter: Optional[RiderStatus] = Query(None, alias="status", description="Filter by application status"),
    db: AsyncSession = Depends(get_db)
):
    query = select(Rider)
    if status_filter:
        query = query.where(Rider.status == status_filter)
    query = query.order_by(Rider.created_at.desc(), Rider.id.desc())

    result = await db.execute(query)
    return [RiderResponse.model_validate(r) for r in result.scalars().all()]


@router.post("", response_model=RiderResponse, status_code=status.HTTP_201_CREATED)
async def apply_as_rider(
    rider_data: RiderCreate,
    db: AsyncSession = Depends(get_db)
):
    """Submit a rider application; it starts as pending."""
    rider = Rider(**rider_data.model_dump(), status=RiderStatus.PENDING)

    db.add(rider)
    await db.commit()
    await db.refresh(rider)

    await log_event(
        db=db,
        action=AuditAction.RIDER_APPLIED,
        actor_email=rider.email,
        subject_type="rider",
        subject_id=rider.id,
        metadata={"region": rider.region, "district": rider.district}
    )

    return RiderResponse.model_validate(rider)


@router.patch("/{rider_id}", response_model=RiderResponse)
async def update_rider_status(
    rider_id: int = Path(..., description="Rider ID"),
    status_update: RiderStatusUpdate = ...,
    admin: VerifiedIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Change a rider application's status (admin only).

    Approval promotes the user account with the given email (or the
    rider's own email) to the ``rider`` role.
    """
    rider = await db.get(Rider, rider_id)
    if not rider:
        raise ResourceNotFoundError("Rider", rider_id)

    previous_status = rider.status
    rider.status = status_update.status

    promoted = False
    if status_update.status == RiderStatus.APPROVED:
        email = status_update.email or rider.email
        result = await db.execute(
            update(User).where(User.email == email).values(role=UserRole.RIDER)
        )
        promoted = result.rowcount > 0

    await db.commit()
    await db.refresh(rider)

    await log_event(
        db=db,
        action=AuditAction.RIDER_STATUS_CHANGED,
        actor_email=admin.email,
        subject_type="rider",
        subject_id=rider.id,
        metadata={
            "previous_status": previous_status.value,
            "status": rider.status.value,
            "user_promoted": promoted
        }
    )

    return RiderResponse.model_validate(rider)
