# app/database.py
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from app.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Cart snapshot database
#
# - SQLite (default): single file next to the app, shared
#   across request threads (check_same_thread=False)
# - Postgres (Supabase pooler): sslmode=require, 1 pooled
#   connection, pre-ping before use
# ---------------------------------------------------------


def build_engine(db_url: str) -> Engine:
    """
    Create the SQLModel engine for the given URL.

    Postgres URLs get sslmode=require appended if missing and a
    minimal pool, since the Supabase session pooler limits clients.
    """
    if db_url.startswith("sqlite"):
        return create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    if "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


engine = build_engine(settings.DATABASE_URL)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)
