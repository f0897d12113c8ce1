# /eduguide/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ..core.config import get_settings

# The database URL comes from the DATABASE_URL environment variable.
# It defaults to a local SQLite file for development.
DATABASE_URL = get_settings().database_url


def build_engine(database_url: str, **kwargs):
    """Creates an engine; the 'check_same_thread' argument is only needed for SQLite."""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(database_url, **kwargs)


engine = build_engine(DATABASE_URL)

# Each instance of this class will be a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency to get a DB session. This will be used in our API routers.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
