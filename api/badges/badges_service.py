import logging
from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from api.activities.activities_model import ActivityAction, BADGE_ACTIVITY_STATE_ID
from api.activities.activities_service import add_activity
from api.badges.badges_model import Badge
from api.badges.evaluator import evaluate
from api.badges.user_badges_model import UserBadge
from api.states.states_service import get_visited_state_codes, visited_states_changed
from config.badges_config import INITIAL_BADGES
from config.settings import settings
from utils.user_ids import normalize_user_id

logger = logging.getLogger(__name__)


class BadgeCheckError(Exception):
    """The visited states or the badge catalog could not be read."""


class AwardOutcome(BaseModel):
    user_badge: Any
    created: bool
    # set when the badge was recorded but its activity entry was not
    history_error: Optional[str] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)


class BadgeCheckResult(BaseModel):
    awarded: List[Any] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def new_badges_earned(self) -> bool:
        return bool(self.awarded)


class BadgeService:
    def __init__(self, db: Session):
        self.db = db

    # ─── Catalog ────────────────────────────────────────────────────────────────
    def list_badges(self) -> List[Badge]:
        return self.db.query(Badge).order_by(Badge.tier, Badge.name).all()

    def list_badges_by_category(self, category: str) -> List[Badge]:
        return (
            self.db.query(Badge)
              .filter(Badge.category == category)
              .order_by(Badge.tier, Badge.name)
              .all()
        )

    def get_badge(self, badge_id: int) -> Optional[Badge]:
        return self.db.get(Badge, badge_id)

    def list_held_badge_ids(self, user_id: str) -> Set[int]:
        rows = (
            self.db.query(UserBadge.badge_id)
              .filter(UserBadge.user_id == normalize_user_id(user_id))
              .all()
        )
        return {badge_id for (badge_id,) in rows}

    def list_user_badges(self, user_id: str) -> List[UserBadge]:
        return (
            self.db.query(UserBadge)
              .filter(UserBadge.user_id == normalize_user_id(user_id))
              .order_by(UserBadge.earned_at.desc(), UserBadge.id.desc())
              .all()
        )

    # ─── Awarding ───────────────────────────────────────────────────────────────
    def _find_user_badge(self, user_id: str, badge_id: int) -> Optional[UserBadge]:
        return (
            self.db.query(UserBadge)
              .filter_by(user_id=user_id, badge_id=badge_id)
              .one_or_none()
        )

    def award_badge(
        self,
        user_id: str,
        badge_id: int,
        metadata: Optional[Dict[str, Any]] = None
    ) -> AwardOutcome:
        """
        Record that `user_id` earned `badge_id`, at most once.

        An existing award is returned untouched (created=False). The unique
        constraint on (user_id, badge_id) decides concurrent inserts; the
        loser gets the winner's row back. A fresh award also appends an
        "earned_badge" activity; if that write fails the award stands and
        the failure is returned in history_error.
        """
        user_id = normalize_user_id(user_id)
        badge = self.get_badge(badge_id)
        if badge is None:
            raise LookupError(f"Badge {badge_id} not found")
        badge_name = badge.name

        existing = self._find_user_badge(user_id, badge_id)
        if existing is not None:
            return AwardOutcome(user_badge=existing, created=False)

        user_badge = UserBadge(
            user_id=user_id,
            badge_id=badge_id,
            award_metadata=metadata or None
        )
        self.db.add(user_badge)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self._find_user_badge(user_id, badge_id)
            if existing is None:
                raise
            logger.info("Badge %s already awarded to %s by a concurrent check", badge_id, user_id)
            return AwardOutcome(user_badge=existing, created=False)
        self.db.refresh(user_badge)
        logger.info("Awarded badge %s (%s) to %s", badge_id, badge_name, user_id)

        history_error = None
        try:
            add_activity(
                self.db,
                user_id=user_id,
                state_id=BADGE_ACTIVITY_STATE_ID,
                state_name=badge_name,
                action=ActivityAction.earned_badge
            )
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to record earned_badge activity for badge %s, user %s", badge_id, user_id)
            history_error = f"Badge {badge_id} awarded but its activity entry was not recorded"

        return AwardOutcome(user_badge=user_badge, created=True, history_error=history_error)

    # ─── Eligibility pass ───────────────────────────────────────────────────────
    def check_for_new_badges(self, user_id: str) -> BadgeCheckResult:
        """
        One eligibility pass: read visited states and catalog, evaluate the
        badges the user does not hold, award each satisfied one in catalog
        order. Read failures raise BadgeCheckError with nothing awarded; a
        failed award is reported in `errors` and the pass continues.
        """
        user_id = normalize_user_id(user_id)
        try:
            visited = get_visited_state_codes(self.db, user_id)
            catalog = self.list_badges()
            held = self.list_held_badge_ids(user_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Badge check for %s aborted: could not read state", user_id)
            raise BadgeCheckError(f"Could not load badge data for {user_id}") from e

        unearned = [badge for badge in catalog if badge.id not in held]
        logger.info(
            "User %s has visited %d states, holds %d badges, checking %d",
            user_id, len(visited), len(held), len(unearned)
        )

        result = BadgeCheckResult()
        for eligible in evaluate(visited, unearned):
            badge = eligible.badge
            badge_id = badge.id
            try:
                outcome = self.award_badge(user_id, badge_id, eligible.metadata)
            except (SQLAlchemyError, LookupError):
                self.db.rollback()
                logger.exception("Failed to award badge %s to %s", badge_id, user_id)
                result.errors.append(f"Failed to award badge {badge_id}")
                continue

            if outcome.history_error:
                result.errors.append(outcome.history_error)
            if outcome.created:
                result.awarded.append(badge)

        logger.info("User %s earned %d new badges", user_id, len(result.awarded))
        return result


def seed_badges(db: Session) -> int:
    """Insert the initial catalog when the badges table is empty."""
    existing = db.query(Badge.id).count()
    if existing:
        logger.info("Found %d existing badges. Skipping seeding.", existing)
        return 0

    for entry in INITIAL_BADGES:
        db.add(Badge(
            name=entry["name"],
            description=entry["description"],
            image_url=entry["image_url"],
            criteria=entry["criteria"],
            tier=int(entry["tier"]),
            category=entry["category"].value
        ))
    db.commit()
    logger.info("Seeded %d badges.", len(INITIAL_BADGES))
    return len(INITIAL_BADGES)


@visited_states_changed.connect
def on_visited_states_changed(sender, **kwargs):
    if not settings.AUTO_CHECK_BADGES:
        return
    db: Session = kwargs.get("db")
    user_id: str = kwargs.get("user_id")

    try:
        result = BadgeService(db).check_for_new_badges(user_id)
    except BadgeCheckError:
        # the toggle itself already succeeded; the next check will catch up
        logger.exception("Automatic badge check failed for %s", user_id)
        return
    for message in result.errors:
        logger.warning("Automatic badge check for %s: %s", user_id, message)
