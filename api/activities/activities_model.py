# activities_model.py
import enum
from sqlalchemy import Column, Integer, String, DateTime, func
from config.database import Base


class ActivityAction(str, enum.Enum):
    visited      = "visited"
    unvisited    = "unvisited"
    earned_badge = "earned_badge"


# state_id recorded on badge activities, which have no state
BADGE_ACTIVITY_STATE_ID = "badge"


class Activity(Base):
    __tablename__ = "activities"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    user_id    = Column(String(100), nullable=False, index=True)
    state_id   = Column(String(10), nullable=False)
    state_name = Column(String(100), nullable=False)  # state or badge name
    action     = Column(String(30), nullable=False)
    timestamp  = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Activity(user_id='{self.user_id}', action='{self.action}', state_id='{self.state_id}')>"
