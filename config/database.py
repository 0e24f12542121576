from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from config.settings import settings

DATABASE_URL = settings.DATABASE_URL


def _engine_options(url: str) -> dict:
    # sqlite pools reject the sizing options and need cross-thread access
    # because the TestClient and uvicorn worker threads share connections
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        # Connection pooling settings
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "connect_args": {"options": "-c timezone=utc"},
    }


engine = create_engine(
    DATABASE_URL,
    # Only echo SQL queries in debug mode
    echo=settings.DEBUG,
    **_engine_options(DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
