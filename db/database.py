# db/database.py
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, scoped_session

logger = logging.getLogger(__name__)


def make_engine(database_url: str):
    """Create the process-wide engine (and its connection pool)."""
    engine_args = {}
    if database_url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
    else:
        engine_args["pool_pre_ping"] = True
    return create_engine(database_url, echo=False, **engine_args)


def make_session_factory(engine):
    return scoped_session(
        sessionmaker(autoflush=False, bind=engine)
    )


def init_db(engine):
    """Create the employee_details table and its indexes if they don't exist."""
    from models.application import Base
    Base.metadata.create_all(bind=engine)
    logger.info("employee_details table and indexes created or verified")


def ping(engine):
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
