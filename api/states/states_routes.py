from fastapi import APIRouter, Depends
from typing import List
from sqlalchemy.orm import Session
from config.database import get_db
from api.states.states_controller import (
    list_all_states,
    read_visited_states,
    toggle_state,
    reset_states,
)
from api.states.states_schema import StateRead, VisitedStateRead, VisitedStateToggle, ResetResponse

router = APIRouter(tags=["States"])

@router.get(
    "/states",
    response_model=List[StateRead],
    summary="List every state"
)
def get_states(db: Session = Depends(get_db)):
    return list_all_states(db)

@router.get(
    "/visited-states/{user_id}",
    response_model=List[VisitedStateRead],
    summary="List a user's visited-state rows"
)
def get_visited(user_id: str, db: Session = Depends(get_db)):
    return read_visited_states(user_id, db)

@router.post(
    "/visited-states/toggle",
    response_model=VisitedStateRead,
    summary="Mark a state visited or unvisited"
)
def post_toggle(req: VisitedStateToggle, db: Session = Depends(get_db)):
    return toggle_state(req, db)

@router.post(
    "/visited-states/reset/{user_id}",
    response_model=ResetResponse,
    summary="Clear all visited states (earned badges are kept)"
)
def post_reset(user_id: str, db: Session = Depends(get_db)):
    return reset_states(user_id, db)
