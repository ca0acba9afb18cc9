"""SQLAlchemy model for organizations."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import expression

from volunteer_match.infrastructure.database import Base
from volunteer_match.utils import naive_utc_now


class OrganizationModel(Base):
    """Database representation of an organization posting opportunities."""

    __tablename__ = "organization"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    verified = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime, nullable=False, default=naive_utc_now)


__all__ = ["OrganizationModel"]
