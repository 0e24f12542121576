from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from utils.camel_model import CamelModel


class StateRead(CamelModel):
    id: int
    state_id: str
    name: str


class VisitedStateRead(CamelModel):
    id: int
    state_id: str
    user_id: str
    visited: bool
    visited_at: datetime


class VisitedStateToggle(CamelModel):
    state_id: str = Field(..., min_length=2, max_length=2)
    user_id: str = Field(..., min_length=1)
    # clients send booleans, "true"/"false" or 1/0
    visited: bool = True
    visited_at: Optional[datetime] = None

    @field_validator("state_id")
    @classmethod
    def upper_state_id(cls, v: str) -> str:
        return v.strip().upper()


class ResetResponse(CamelModel):
    success: bool
