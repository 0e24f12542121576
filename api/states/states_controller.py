from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from config.database import get_db
from api.states.states_schema import StateRead, VisitedStateRead, VisitedStateToggle, ResetResponse
from api.states.states_service import (
    list_states,
    get_visited_states,
    toggle_state_visited,
    reset_visited_states,
)

def list_all_states(db: Session = Depends(get_db)) -> List[StateRead]:
    return list_states(db)

def read_visited_states(user_id: str, db: Session = Depends(get_db)) -> List[VisitedStateRead]:
    return get_visited_states(db, user_id)

def toggle_state(req: VisitedStateToggle, db: Session = Depends(get_db)) -> VisitedStateRead:
    try:
        return toggle_state_visited(
            db,
            state_id=req.state_id,
            user_id=req.user_id,
            visited=req.visited,
            visited_at=req.visited_at
        )
    except LookupError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown state '{req.state_id}'"
        )

def reset_states(user_id: str, db: Session = Depends(get_db)) -> ResetResponse:
    reset_visited_states(db, user_id)
    return ResetResponse(success=True)
