"""
User database model.
"""

from sqlalchemy import Column, Integer, String, DateTime, Enum
from zapship.app.models.clock import utcnow
from zapship.app.db.session import Base
from zapship.app.models.enums import UserRole


class User(Base):
    """
    Registered marketplace user.

    Credentials live with the identity provider; this row only records the
    profile and the platform role.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    display_name = Column(String(150), nullable=True)
    photo_url = Column(String(500), nullable=True)

    role = Column(Enum(UserRole, values_callable=lambda e: [m.value for m in e]), default=UserRole.USER, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"
