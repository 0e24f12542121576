import logging
from config.database import Base, SessionLocal, engine
from config.logging_config import setup_logging
# register every table on Base before create_all
from api.states.states_model import State, VisitedState  # noqa: F401
from api.activities.activities_model import Activity  # noqa: F401
from api.badges.user_badges_model import UserBadge  # noqa: F401
from api.badges.badges_service import seed_badges
from api.states.states_service import seed_states

logger = logging.getLogger("init_db")

def init_db():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_states(db)
        seed_badges(db)
    finally:
        db.close()

if __name__ == "__main__":
    setup_logging()
    init_db()
    logger.info("✅ Database initialized!")
