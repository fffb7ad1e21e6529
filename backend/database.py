from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from config.settings import DATA_DIR, DATABASE_URL

DATA_DIR.mkdir(parents=True, exist_ok=True)


def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for the write lock instead of failing immediately
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str, in_memory: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite engines get WAL journaling, a busy timeout and foreign key
    enforcement on every new connection. In-memory databases share a single
    connection so every session sees the same tables.

    Args:
        url: SQLAlchemy database URL
        in_memory: Use a StaticPool (required for sqlite:// across threads)

    Returns:
        Configured Engine
    """
    is_sqlite = url.startswith('sqlite')

    if in_memory:
        db_engine = create_engine(
            url,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
        )
    elif is_sqlite:
        db_engine = create_engine(
            url,
            connect_args={'check_same_thread': False},
            echo=False,
            pool_size=20,
            max_overflow=30,
            pool_pre_ping=True,
            pool_recycle=3600  # Recycle connections after 1 hour to prevent stale connections
        )
    else:
        db_engine = create_engine(url, pool_pre_ping=True, pool_recycle=3600)

    if is_sqlite:
        event.listen(db_engine, "connect", _set_sqlite_pragma)

    return db_engine


engine = create_db_engine(DATABASE_URL)

SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


def get_db():
    """Dependency for FastAPI routes"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
