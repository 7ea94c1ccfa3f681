from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from cleanpro.core.config import settings
import os
import logging
import threading
from contextlib import contextmanager

logger = logging.getLogger(__name__)

if os.getenv("PYTEST_RUN") == "1":
    SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
else:
    SQLALCHEMY_DATABASE_URL = settings.SQLALCHEMY_DATABASE_URL

is_sqlite = SQLALCHEMY_DATABASE_URL.startswith("sqlite")
is_memory = is_sqlite and ":memory:" in SQLALCHEMY_DATABASE_URL

pool_kwargs = {
    # Avoid stale idle connections causing first-hit failures after inactivity
    "pool_pre_ping": True,
}
if is_sqlite:
    # SQLite uses a per-process connection; pass connect_args and avoid pool sizing
    connect_args = {"check_same_thread": False, "timeout": 15}
    if is_memory:
        # One shared connection, otherwise every checkout sees an empty database
        pool_kwargs["poolclass"] = StaticPool
else:
    connect_args = {}
    pool_kwargs.update({
        "pool_size": int(os.getenv("DB_POOL_SIZE") or 5),
        "max_overflow": int(os.getenv("DB_MAX_OVERFLOW") or 5),
        "pool_recycle": int(os.getenv("DB_POOL_RECYCLE") or 300),
    })

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args=connect_args,
    **pool_kwargs,
)

if is_sqlite and not is_memory:

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        try:
            # WAL improves read concurrency; NORMAL reduces fsync pressure.
            cursor.execute("PRAGMA journal_mode=WAL;")
            cursor.execute("PRAGMA synchronous=NORMAL;")
            cursor.execute("PRAGMA busy_timeout=60000;")
        finally:
            cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Catalog and quote mutations are serialized across request threads.
write_lock = threading.RLock()


# Dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_session():
    """Provide a short‑lived SessionLocal with guaranteed close.

    Use in places where FastAPI Depends is unavailable (startup hooks,
    scripts) to ensure connections are promptly returned to the pool.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create every table registered on ``Base``."""
    from . import models  # noqa: F401  (registers mappers)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured at %s", "memory" if is_memory else SQLALCHEMY_DATABASE_URL.split("///")[-1])
