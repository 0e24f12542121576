from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from sqlalchemy.orm import Session
from config.database import get_db
from config.settings import settings
from api.activities.activities_controller import list_activities, create_activity
from api.activities.activities_schema import ActivityCreate, ActivityRead

router = APIRouter(prefix="/activities", tags=["Activities"])

@router.get(
    "/{user_id}",
    response_model=List[ActivityRead],
    summary="Recent activity for a user, newest first"
)
def get_user_activities(
    user_id: str,
    limit: Optional[int] = Query(None, ge=1, le=200),
    db: Session = Depends(get_db)
):
    return list_activities(user_id, limit or settings.ACTIVITY_DEFAULT_LIMIT, db)

@router.post(
    "",
    response_model=ActivityRead,
    summary="Append an activity entry"
)
def post_activity(req: ActivityCreate, db: Session = Depends(get_db)):
    return create_activity(req, db)
