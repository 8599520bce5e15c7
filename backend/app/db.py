# backend/app/db.py
import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base

from backend.app.config import DATABASE_URL

logger = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {}
    # Make sure folder exists for a file-backed database
    database = make_url(url).database
    if database and database != ":memory:":
        folder = os.path.dirname(database)
        if folder:
            os.makedirs(folder, exist_ok=True)
    return {"connect_args": {"check_same_thread": False}}


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all tables (safe to call on every startup)."""
    # Import models *AFTER* Base is defined
    from backend.app.models.transaction_model import Transaction  # noqa: F401

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database ready at %s", bind.url.render_as_string(hide_password=True))
