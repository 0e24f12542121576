# user_badges_model.py
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from config.database import Base  # use same Base
from api.badges.badges_model import Badge

class UserBadge(Base):
    __tablename__ = "user_badges"
    # at most one award per (user, badge)
    __table_args__ = (
        UniqueConstraint("user_id", "badge_id", name="uq_user_badges_user_badge"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(100), nullable=False, index=True)
    badge_id = Column(Integer, ForeignKey("badges.id", ondelete="CASCADE"), nullable=False)
    earned_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    # "metadata" is reserved on declarative classes
    award_metadata = Column("metadata", JSON, nullable=True)

    badge = relationship(
        Badge,
        back_populates="user_badges"
    )

    def __repr__(self):
        return f"<UserBadge(user_id='{self.user_id}', badge_id={self.badge_id})>"
