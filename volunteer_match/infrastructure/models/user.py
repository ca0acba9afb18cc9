"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from volunteer_match.infrastructure.database import Base
from volunteer_match.utils import naive_utc_now


class UserModel(Base):
    """Database representation of a volunteer or organization staff member."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    name = Column(String(120), nullable=False)
    role = Column(String(20), nullable=False)
    organization_id = Column(
        Integer,
        ForeignKey("organization.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=naive_utc_now)

    organization = relationship("OrganizationModel", lazy="joined")


__all__ = ["UserModel"]
