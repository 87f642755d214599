# dashboard/database.py
import urllib.parse
from typing import AsyncGenerator

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import DATABASE_URL, SQL_ECHO
from .logger import setup_logger

logger = setup_logger(__name__)

# Create engine
engine = create_async_engine(DATABASE_URL, echo=SQL_ECHO, future=True)

# Create session factory
async_session_maker = sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

# Base declarative
Base = declarative_base()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session


async def create_tables(bind=engine):
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def ensure_database_exists(url: str = DATABASE_URL) -> bool:
    """
    Create the Postgres database named in ``url`` when it is missing, by
    connecting to the maintenance DB (postgres) with psycopg2.

    Returns True when the database had to be created. Non-Postgres URLs are
    left alone.
    """
    parsed = urllib.parse.urlparse(url)
    if not parsed.scheme.startswith("postgresql"):
        return False
    dbname = parsed.path.lstrip("/") if parsed.path else ""
    if not dbname:
        return False

    import psycopg2
    import psycopg2.extensions

    conn = psycopg2.connect(
        dbname="postgres",
        user=parsed.username or "postgres",
        password=parsed.password or "",
        host=parsed.hostname or "localhost",
        port=parsed.port or 5432,
    )
    conn.autocommit = True
    try:
        cur = conn.cursor()
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (dbname,))
        exists = cur.fetchone() is not None
        if not exists:
            cur.execute("CREATE DATABASE %s", (psycopg2.extensions.AsIs(dbname),))
        cur.close()
    finally:
        conn.close()
    return not exists


async def commit(session: AsyncSession, conflict_detail: str = "Record already exists"):
    """Commit the session, mapping DB failures to HTTP errors for the routers."""
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise HTTPException(status_code=422, detail=conflict_detail)
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("database error on commit")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                            detail="Database temporarily unavailable, try again later")
