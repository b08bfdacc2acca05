"""
Security guards for role-based and ownership-based access control.
"""

from typing import Optional
from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from zapship.app.core.dependencies import get_current_user
from zapship.app.core.exceptions import InsufficientPermissionsError
from zapship.app.db.session import get_db
from zapship.app.models.enums import UserRole
from zapship.app.models.user import User
from zapship.app.schemas.auth import VerifiedIdentity


async def require_admin(
    current_user: VerifiedIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> VerifiedIdentity:
    """
    Dependency for operator-only endpoints.

    The role is read from the stored user profile; a ``role`` claim in the
    token alone grants nothing.

    Usage:
        @router.patch("/riders/{rider_id}")
        async def update_rider_status(admin: VerifiedIdentity = Depends(require_admin)):
            ...

    Raises:
        InsufficientPermissionsError: 403 unless the caller's profile is ADMIN
    """
    result = await db.execute(
        select(User.role).where(func.lower(User.email) == current_user.email.strip().lower())
    )
    role = result.scalar_one_or_none()

    if role != UserRole.ADMIN:
        raise InsufficientPermissionsError(
            message="Admin access required",
            details={"required_role": UserRole.ADMIN.value}
        )

    return current_user


class EmailOwnershipGuard:
    """
    Ownership guard for resources keyed by the owner's email.

    Usage:
        ownership_guard = EmailOwnershipGuard()

        @router.get("/payments")
        async def list_payments(
            email: Optional[str] = None,
            current_user: VerifiedIdentity = Depends(get_current_user),
        ):
            owner_email = ownership_guard.resolve(email, current_user)
            ...
    """

    def enforce(self, requested_email: str, current_user: VerifiedIdentity, resource_name: str = "resource"):
        """
        Raise 403 unless the requested email belongs to the caller.

        Raises:
            InsufficientPermissionsError if ownership check fails
        """
        if requested_email.strip().lower() != current_user.email.strip().lower():
            raise InsufficientPermissionsError(
                details={"resource": resource_name}
            )

    def resolve(self, requested_email: Optional[str], current_user: VerifiedIdentity, resource_name: str = "resource") -> str:
        """
        Get the owner email to filter queries by.

        Always the caller's own email; a requested email only has to match it.
        """
        if requested_email:
            self.enforce(requested_email, current_user, resource_name)
        return current_user.email
