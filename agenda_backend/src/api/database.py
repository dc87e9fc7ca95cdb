from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from src.api.config import DATABASE_URL
from src.api.models import Base


def make_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
    """Create an engine for ``url``. Extra keyword arguments go to ``create_engine``."""
    # SQLite needs check_same_thread=False for multithreading in FastAPI
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, future=True, **kwargs)


engine = make_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = None) -> None:
    """Create the users, notes and contacts tables if missing."""
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    """
    Dependency that provides a database session and ensures proper cleanup.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
