"""
Database connection and session management

SQLAlchemy 2.0 style. SQLite is the primary store; connections are
configured so SQLAlchemy owns BEGIN/COMMIT, which keeps migration DDL
and SAVEPOINTs transactional under the pysqlite driver.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from duellog.config import get_settings

settings = get_settings()


def configure_sqlite(engine: Engine, begin_statement: str = "BEGIN IMMEDIATE") -> Engine:
    """
    Hand transaction control to SQLAlchemy.

    Transactions take the write lock on BEGIN. A deferred BEGIN would let
    two sessions hold read locks across a lookup and the following insert;
    SQLite then fails one of them at once with "database is locked"
    instead of letting it wait on the busy timeout.
    """
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Disable pysqlite's own BEGIN handling
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql(begin_statement)

    return engine


def build_engine(database_url: str, echo: bool = False, busy_timeout: float = 30.0) -> Engine:
    """Create an engine for the configured store."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sessions are handed across FastAPI's threadpool workers
        connect_args["check_same_thread"] = False
        # Writers queue on the lock for this long
        connect_args["timeout"] = busy_timeout
    engine = create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connection before use
        echo=echo,  # Log SQL queries in debug mode
        connect_args=connect_args,
    )
    return configure_sqlite(engine)


# Create database engine
engine = build_engine(
    settings.database_url,
    echo=settings.debug,
    busy_timeout=settings.sqlite_busy_timeout,
)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create base class for models
Base = declarative_base()


def get_db():
    """
    Dependency for getting database session

    Usage in FastAPI:
        @router.get("/items")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
