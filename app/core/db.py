from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from loguru import logger

from app.core.config import DATABASE_URL

# --- Base (single source of truth) ---
Base = declarative_base()

# --- Engine ---
_engine_kwargs = {}
if DATABASE_URL.startswith("sqlite"):
    _engine_kwargs["connect_args"] = {"check_same_thread": False}
    # in-memory sqlite must share one connection or every session sees an empty db
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        _engine_kwargs["poolclass"] = StaticPool

engine = create_engine(
    DATABASE_URL,
    echo=False,
    future=True,
    pool_pre_ping=not DATABASE_URL.startswith("sqlite"),
    **_engine_kwargs,
)

# --- Session factory ---
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)

# --- SQL query logging ---
@event.listens_for(engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    logger.debug(f"SQL: {statement} | params={parameters}")

# --- FastAPI dependency ---
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
