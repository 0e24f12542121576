# badges_controller.py
import logging
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from config.database import get_db
from api.badges.badges_schema import (
    AwardBadgeRequest,
    BadgeRead,
    CheckBadgesResponse,
    UserBadgeRead,
    UserBadgeWithBadge,
)
from api.badges.badges_service import BadgeService, BadgeCheckError

logger = logging.getLogger(__name__)

service = BadgeService

def list_all_badges(db: Session = Depends(get_db)) -> List[BadgeRead]:
    return service(db).list_badges()

def list_badges_in_category(category: str, db: Session = Depends(get_db)) -> List[BadgeRead]:
    return service(db).list_badges_by_category(category)

def read_badge(badge_id: int, db: Session = Depends(get_db)) -> BadgeRead:
    badge = service(db).get_badge(badge_id)
    if not badge:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Badge not found")
    return badge

def read_user_badges(user_id: str, db: Session = Depends(get_db)) -> List[UserBadgeWithBadge]:
    return [
        UserBadgeWithBadge(badge=ub.badge, user_badge=ub)
        for ub in service(db).list_user_badges(user_id)
    ]

def check_badges(user_id: str, db: Session = Depends(get_db)) -> CheckBadgesResponse:
    try:
        result = service(db).check_for_new_badges(user_id)
    except BadgeCheckError:
        # details are in the log; the client only learns that the check failed
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to check for new badges"
        )
    for message in result.errors:
        logger.warning("Badge check for %s: %s", user_id, message)
    return CheckBadgesResponse(
        new_badges_earned=result.new_badges_earned,
        badges=result.awarded
    )

def award_badge(req: AwardBadgeRequest, db: Session = Depends(get_db)) -> UserBadgeRead:
    try:
        outcome = service(db).award_badge(req.user_id, req.badge_id, req.metadata)
    except LookupError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Badge not found")
    if outcome.history_error:
        logger.warning(outcome.history_error)
    return outcome.user_badge
