from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from api.activities.activities_model import Activity, ActivityAction
from utils.user_ids import normalize_user_id


def add_activity(
    db: Session,
    user_id: str,
    state_id: str,
    state_name: str,
    action: ActivityAction,
    timestamp: Optional[datetime] = None,
    commit: bool = True
) -> Activity:
    """
    Append one entry to the user's activity feed.
    With commit=False the row is only flushed, leaving the transaction to the caller.
    """
    activity = Activity(
        user_id=normalize_user_id(user_id),
        state_id=state_id,
        state_name=state_name,
        action=ActivityAction(action).value,
        timestamp=timestamp or datetime.now(timezone.utc),
    )
    db.add(activity)
    if commit:
        db.commit()
        db.refresh(activity)
    else:
        db.flush()
    return activity


def get_activities(
    db: Session,
    user_id: str,
    limit: int = 10
) -> List[Activity]:
    return (
        db.query(Activity)
          .filter(Activity.user_id == normalize_user_id(user_id))
          .order_by(Activity.timestamp.desc(), Activity.id.desc())
          .limit(limit)
          .all()
    )
