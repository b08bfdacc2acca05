"""
User profile API Endpoints.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from zapship.app.db.session import get_db
from zapship.app.models.user import User
from zapship.app.models.enums import UserRole
from zapship.app.schemas.user import UserCreate, UserResponse, UserExistsResponse
from zapship.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={200: {"model": UserExistsResponse}}
)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Register a user profile.

    Every new user starts with the ``user`` role. Registering an existing
    email is not an error; it answers 200 with a message.
    """
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalar_one_or_none():
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=UserExistsResponse().model_dump(by_alias=True)
        )

    new_user = User(
        email=user_data.email,
        display_name=user_data.display_name,
        photo_url=user_data.photo_url,
        role=UserRole.USER,
    )

    db.add(new_user)
    await db.commit()
    await db.refresh(new_user)

    await log_event(
        db=db,
        action=AuditAction.USER_CREATED,
        actor_email=new_user.email,
        subject_type="user",
        subject_id=new_user.id
    )

    return UserResponse.model_validate(new_user)
