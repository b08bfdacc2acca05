"""
Parcel Booking API Endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from zapship.app.db.session import get_db
from zapship.app.models.parcel import Parcel
from zapship.app.models.parcel_enums import PaymentStatus
from zapship.app.schemas.parcel import ParcelCreate, ParcelResponse, ParcelDeleteResponse
from zapship.app.core.exceptions import ResourceNotFoundError
from zapship.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/parcels", tags=["Parcels"])


@router.get("", response_model=List[ParcelResponse])
async def list_parcels(
    email: Optional[str] = Query(None, description="Filter by sender email"),
    db: AsyncSession = Depends(get_db)
):
    """List parcels, newest first, optionally only those of one sender."""
    query = select(Parcel)
    if email:
        query = query.where(Parcel.sender_email == email)
    query = query.order_by(Parcel.created_at.desc(), Parcel.id.desc())

    result = await db.execute(query)
    return [ParcelResponse.model_validate(p) for p in result.scalars().all()]


@router.get("/{parcel_id}", response_model=ParcelResponse)
async def get_parcel(
    parcel_id: int = Path(..., description="Parcel ID"),
    db: AsyncSession = Depends(get_db)
):
    parcel = await db.get(Parcel, parcel_id)
    if not parcel:
        raise ResourceNotFoundError("Parcel", parcel_id)

    return ParcelResponse.model_validate(parcel)


@router.post("", response_model=ParcelResponse, status_code=status.HTTP_201_CREATED)
async def create_parcel(
    parcel_data: ParcelCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Book a parcel.

    Payment fields start as unpaid; tracking id and paid amount are only
    set by payment finalization.
    """
    new_parcel = Parcel(
        **parcel_data.model_dump(),
        payment_status=PaymentStatus.UNPAID,
    )

    db.add(new_parcel)
    await db.commit()
    await db.refresh(new_parcel)

    await log_event(
        db=db,
        action=AuditAction.PARCEL_CREATED,
        actor_email=new_parcel.sender_email,
        subject_type="parcel",
        subject_id=new_parcel.id,
        metadata={"parcel_name": new_parcel.parcel_name, "cost": str(new_parcel.cost)}
    )

    return ParcelResponse.model_validate(new_parcel)


@router.delete("/{parcel_id}", response_model=ParcelDeleteResponse)
async def delete_parcel(
    parcel_id: int = Path(..., description="Parcel ID"),
    db: AsyncSession = Depends(get_db)
):
    """Delete a parcel; ``deletedCount`` is 0 when nothing matched."""
    result = await db.execute(delete(Parcel).where(Parcel.id == parcel_id))
    await db.commit()

    if result.rowcount:
        await log_event(
            db=db,
            action=AuditAction.PARCEL_DELETED,
            subject_type="parcel",
            subject_id=parcel_id
        )

    return ParcelDeleteResponse(deleted_count=result.rowcount)
