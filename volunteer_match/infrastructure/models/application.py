"""SQLAlchemy model for volunteer applications."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from volunteer_match.domain.entities import APPLICATION_STATUS_PENDING
from volunteer_match.infrastructure.database import Base
from volunteer_match.utils import naive_utc_now


class ApplicationModel(Base):
    """Database representation of an application to an opportunity."""

    __tablename__ = "application"
    __table_args__ = (
        UniqueConstraint(
            "volunteer_id", "opportunity_id", name="uq_application_volunteer_opportunity"
        ),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'withdrawn')",
            name="ck_application_status",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    volunteer_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    opportunity_id = Column(
        Integer,
        ForeignKey("opportunity.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    message = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=APPLICATION_STATUS_PENDING)
    applied_at = Column(DateTime, nullable=False, default=naive_utc_now)
    decided_at = Column(DateTime, nullable=True)
    decided_by = Column(Integer, nullable=True)

    opportunity = relationship("OpportunityModel", lazy="joined")
    volunteer = relationship("UserModel", lazy="joined")


__all__ = ["ApplicationModel"]
