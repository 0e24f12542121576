# badges_model.py
import json

from sqlalchemy import Column, Integer, String, Text, DateTime, func
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator
from config.database import Base


class CriteriaText(TypeDecorator):
    """
    JSON stored as text, read back leniently: a value that does not decode
    is returned as the raw string so criteria parsing can reject that one
    badge instead of the whole catalog query failing.
    """
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        try:
            return json.loads(value)
        except (ValueError, RecursionError):
            return value

class Badge(Base):
    __tablename__ = "badges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(255), nullable=True)
    # rule payload as stored by the catalog loader; parsed by api.badges.criteria
    criteria = Column(CriteriaText, nullable=False)
    tier = Column(Integer, nullable=False, default=1)
    category = Column(String(50), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user_badges = relationship(
        "UserBadge",
        back_populates="badge",
        cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Badge(id={self.id}, name='{self.name}')>"
