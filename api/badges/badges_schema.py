from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, Field

from utils.camel_model import CamelModel


class BadgeRead(CamelModel):
    id: int
    name: str
    description: str
    image_url: Optional[str] = None
    criteria: Any
    tier: int
    category: str
    created_at: Optional[datetime] = None


class UserBadgeRead(CamelModel):
    id: int
    user_id: str
    badge_id: int
    earned_at: datetime
    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("award_metadata", "metadata")
    )


class UserBadgeWithBadge(CamelModel):
    badge: BadgeRead
    user_badge: UserBadgeRead


class CheckBadgesResponse(CamelModel):
    new_badges_earned: bool
    badges: List[BadgeRead]


class AwardBadgeRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    badge_id: int = Field(..., gt=0)
    metadata: Optional[Dict[str, Any]] = None
