# badges_routes.py
from fastapi import APIRouter, Depends
from typing import List
from sqlalchemy.orm import Session
from config.database import get_db
from api.badges.badges_controller import (
    list_all_badges,
    list_badges_in_category,
    read_badge,
    read_user_badges,
    check_badges,
    award_badge,
)
from api.badges.badges_schema import (
    AwardBadgeRequest,
    BadgeRead,
    CheckBadgesResponse,
    UserBadgeRead,
    UserBadgeWithBadge,
)

router = APIRouter(tags=["Badges"])

@router.get(
    "/badges",
    response_model=List[BadgeRead],
    summary="List all available badges"
)
def get_badges(
    db: Session = Depends(get_db)
):
    return list_all_badges(db)

@router.get(
    "/badges/category/{category}",
    response_model=List[BadgeRead],
    summary="List badges in one category"
)
def get_badges_by_category(
    category: str,
    db: Session = Depends(get_db)
):
    return list_badges_in_category(category, db)

@router.get(
    "/badges/{badge_id}",
    response_model=BadgeRead,
    summary="Get a single badge"
)
def get_badge(
    badge_id: int,
    db: Session = Depends(get_db)
):
    return read_badge(badge_id, db)

@router.get(
    "/user-badges/{user_id}",
    response_model=List[UserBadgeWithBadge],
    summary="List badges earned by a user, newest first"
)
def get_user_badges(
    user_id: str,
    db: Session = Depends(get_db)
):
    return read_user_badges(user_id, db)

@router.post(
    "/check-badges/{user_id}",
    response_model=CheckBadgesResponse,
    summary="Award every badge the user newly qualifies for"
)
def post_check_badges(
    user_id: str,
    db: Session = Depends(get_db)
):
    """
    Runs one eligibility pass for the user. `badges` lists only the badges
    awarded by this call; calling again without changes returns none.
    """
    return check_badges(user_id, db)

@router.post(
    "/award-badge",
    response_model=UserBadgeRead,
    summary="Award a badge directly (admin/testing)"
)
def post_award_badge(
    req: AwardBadgeRequest,
    db: Session = Depends(get_db)
):
    return award_badge(req, db)
