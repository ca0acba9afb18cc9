"""SQLAlchemy model for opportunities and their capacity ledger columns."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from volunteer_match.domain.entities import OPPORTUNITY_STATUS_ACTIVE
from volunteer_match.infrastructure.database import Base
from volunteer_match.utils import naive_utc_now


class OpportunityModel(Base):
    """Database representation of an opportunity.

    ``current_participants`` and ``status`` form the capacity ledger; the check
    constraints keep the counter inside ``[0, max_participants]`` even if a caller
    bypasses the ledger.
    """

    __tablename__ = "opportunity"
    __table_args__ = (
        CheckConstraint("max_participants > 0", name="ck_opportunity_max_positive"),
        CheckConstraint(
            "current_participants >= 0", name="ck_opportunity_current_non_negative"
        ),
        CheckConstraint(
            "current_participants <= max_participants",
            name="ck_opportunity_within_capacity",
        ),
        CheckConstraint(
            "status IN ('active', 'full', 'closed')", name="ck_opportunity_status"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(
        Integer,
        ForeignKey("organization.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    location = Column(String(200), nullable=False, default="")
    category = Column(String(60), nullable=False, default="")
    event_date = Column(Date, nullable=True)
    duration = Column(String(60), nullable=True)
    required_skills = Column(JSON, nullable=False, default=list)
    max_participants = Column(Integer, nullable=False)
    current_participants = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=OPPORTUNITY_STATUS_ACTIVE, index=True)
    created_at = Column(DateTime, nullable=False, default=naive_utc_now)

    organization = relationship("OrganizationModel", lazy="joined")


__all__ = ["OpportunityModel"]
