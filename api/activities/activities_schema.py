from datetime import datetime
from typing import Optional

from pydantic import Field

from api.activities.activities_model import ActivityAction
from utils.camel_model import CamelModel


class ActivityCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    state_id: str = Field(..., min_length=1, max_length=10)
    state_name: str = Field(..., min_length=1, max_length=100)
    action: ActivityAction
    timestamp: Optional[datetime] = None


class ActivityRead(CamelModel):
    id: int
    user_id: str
    state_id: str
    state_name: str
    action: ActivityAction
    timestamp: datetime
