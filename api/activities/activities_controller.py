from fastapi import Depends
from sqlalchemy.orm import Session
from typing import List
from config.database import get_db
from api.activities.activities_schema import ActivityCreate, ActivityRead
from api.activities.activities_service import add_activity, get_activities

def list_activities(user_id: str, limit: int, db: Session = Depends(get_db)) -> List[ActivityRead]:
    return get_activities(db, user_id, limit)

def create_activity(req: ActivityCreate, db: Session = Depends(get_db)) -> ActivityRead:
    return add_activity(
        db,
        user_id=req.user_id,
        state_id=req.state_id,
        state_name=req.state_name,
        action=req.action,
        timestamp=req.timestamp
    )
