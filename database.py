from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from config import Settings

# Base class for ORM models
Base = declarative_base()


def create_db_engine(settings: Settings, **overrides):
    """
    One engine per process. The pool is bounded (no overflow) so a burst of
    device polls cannot exhaust the database's connection limit.
    """
    url = settings.database_url
    kwargs = {"pool_pre_ping": True}

    if url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_size"] = settings.db_pool_size
        kwargs["max_overflow"] = 0

    kwargs.update(overrides)
    return create_engine(url, **kwargs)


def create_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency for FastAPI routes
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
