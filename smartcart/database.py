# smartcart/database.py
from collections.abc import Callable

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

SessionFactory = Callable[[], Session]

# ---------------------------------------------------------
# Supabase Postgres connection (via pooler)
#
# - sslmode=require   : enforce SSL when running in the cloud
# - pool_size=1       : keep only 1 connection to the Supabase pooler
# - max_overflow=0    : do not open extra connections beyond the pool
# - pool_pre_ping=True: validate connections before using them
#
# Supabase Session mode limits the number of clients. With the SQLAlchemy
# default pool_size (5+) a few processes hit:
#   "MaxClientsInSessionMode: max clients reached"
#
# SQLite URLs (tests, local demos) share one connection across threads.
# ---------------------------------------------------------


def create_db_engine(database_url: str) -> Engine:
    """
    Build the SQLModel engine for the remote tables.

    Appends sslmode=require to Postgres URLs if it is not already present.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    db_url = database_url
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


def create_db_and_tables(engine: Engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def session_factory(engine: Engine) -> SessionFactory:
    """
    Return a callable that opens a new Session per unit of work.

    Services call it from request threads and from the realtime
    callback thread, so sessions are never shared.

    Usage:

        with factory() as session:
            ...
    """

    def _open() -> Session:
        return Session(engine)

    return _open
