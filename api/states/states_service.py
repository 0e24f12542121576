import logging
from datetime import datetime, timezone
from typing import List, Optional, Set

from blinker import signal
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api.activities.activities_model import ActivityAction
from api.activities.activities_service import add_activity
from api.states.states_model import State, VisitedState
from config.states_config import US_STATES
from utils.user_ids import normalize_user_id

logger = logging.getLogger(__name__)

# sent after a user's visited set changes: kwargs db, user_id
visited_states_changed = signal("visited_states_changed")


def list_states(db: Session) -> List[State]:
    return db.query(State).order_by(State.name).all()


def get_state(db: Session, state_id: str) -> Optional[State]:
    return db.query(State).filter(State.state_id == state_id.upper()).one_or_none()


def get_visited_states(db: Session, user_id: str) -> List[VisitedState]:
    return (
        db.query(VisitedState)
          .filter(VisitedState.user_id == normalize_user_id(user_id))
          .order_by(VisitedState.state_id)
          .all()
    )


def get_visited_state_codes(db: Session, user_id: str) -> Set[str]:
    """Codes of every state the user currently has marked visited; empty set if none."""
    rows = (
        db.query(VisitedState.state_id)
          .filter(
              VisitedState.user_id == normalize_user_id(user_id),
              VisitedState.visited.is_(True)
          )
          .all()
    )
    return {state_id.upper() for (state_id,) in rows}


def _find_visited_state(db: Session, user_id: str, state_id: str) -> Optional[VisitedState]:
    return (
        db.query(VisitedState)
          .filter_by(user_id=user_id, state_id=state_id)
          .one_or_none()
    )


def toggle_state_visited(
    db: Session,
    state_id: str,
    user_id: str,
    visited: bool,
    visited_at: Optional[datetime] = None
) -> VisitedState:
    """
    Mark `state_id` visited or unvisited for the user and append the matching
    activity in the same transaction. Raises LookupError for unknown states.
    """
    state = get_state(db, state_id)
    if state is None:
        raise LookupError(f"Unknown state {state_id!r}")

    user_id = normalize_user_id(user_id)
    when = visited_at or datetime.now(timezone.utc)

    # a concurrent first toggle can insert the row between our lookup and
    # commit; the unique constraint rejects ours and the retry updates theirs
    for attempt in range(2):
        row = _find_visited_state(db, user_id, state.state_id)
        if row is None:
            row = VisitedState(user_id=user_id, state_id=state.state_id)
            db.add(row)
        row.visited = visited
        row.visited_at = when

        try:
            add_activity(
                db,
                user_id=user_id,
                state_id=state.state_id,
                state_name=state.name,
                action=ActivityAction.visited if visited else ActivityAction.unvisited,
                timestamp=when,
                commit=False
            )
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            if attempt:
                raise
            logger.info("Visited row for %s/%s created concurrently, retrying", user_id, state.state_id)
    db.refresh(row)
    logger.info("User %s marked %s %s", user_id, state.state_id, "visited" if visited else "unvisited")

    visited_states_changed.send("states", db=db, user_id=user_id)
    return row


def reset_visited_states(db: Session, user_id: str) -> int:
    """Forget every visited state for the user. Earned badges are kept."""
    deleted = (
        db.query(VisitedState)
          .filter(VisitedState.user_id == normalize_user_id(user_id))
          .delete(synchronize_session=False)
    )
    db.commit()
    return deleted


def seed_states(db: Session) -> int:
    if db.query(State.id).first() is not None:
        return 0
    db.add_all(State(state_id=code, name=name) for code, name in US_STATES)
    db.commit()
    logger.info("Seeded %d states", len(US_STATES))
    return len(US_STATES)
