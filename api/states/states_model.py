# states_model.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, UniqueConstraint, func
from config.database import Base


class State(Base):
    __tablename__ = "states"

    id = Column(Integer, primary_key=True, autoincrement=True)
    state_id = Column(String(2), unique=True, nullable=False)  # e.g. "NY", "CA"
    name = Column(String(50), nullable=False)

    def __repr__(self):
        return f"<State(state_id='{self.state_id}', name='{self.name}')>"


class VisitedState(Base):
    __tablename__ = "visited_states"
    __table_args__ = (
        UniqueConstraint("user_id", "state_id", name="uq_visited_states_user_state"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    state_id = Column(String(2), nullable=False, index=True)
    user_id = Column(String(100), nullable=False, index=True)
    visited = Column(Boolean, nullable=False, default=True)
    visited_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<VisitedState(user_id='{self.user_id}', state_id='{self.state_id}', visited={self.visited})>"
