from sqlalchemy import create_engine, event, pool, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
import logging

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_db_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine described by the given settings.

    Postgres (the default) gets a QueuePool sized from settings.
    SQLite is accepted for local runs and tests.
    """
    if settings.is_sqlite:
        return create_engine(
            settings.DATABASE_URL,
            connect_args={"check_same_thread": False},
            echo=settings.DB_ECHO,
        )

    # QueuePool maintains a pool of connections that can be reused
    return create_engine(
        settings.DATABASE_URL,
        poolclass=pool.QueuePool,
        pool_size=settings.DB_POOL_SIZE,  # Number of connections to keep open
        max_overflow=settings.DB_MAX_OVERFLOW,  # Max connections beyond pool_size
        pool_timeout=settings.DB_POOL_TIMEOUT,  # Seconds to wait for connection
        pool_recycle=settings.DB_POOL_RECYCLE,  # Recycle connections after 1 hour
        pool_pre_ping=True,  # Test connections before using them
        echo=settings.DB_ECHO,
    )


engine = create_db_engine(get_settings())


# Log pool statistics for monitoring
@event.listens_for(engine, "connect")
def receive_connect(dbapi_conn, connection_record):
    """Log when a new connection is created"""
    logger.debug("Database connection established")


@event.listens_for(engine, "checkout")
def receive_checkout(dbapi_conn, connection_record, connection_proxy):
    """Log when a connection is checked out from the pool"""
    logger.debug(f"Connection checked out from pool. Pool status: {engine.pool.status()}")


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# Dependency for FastAPI routes
def get_db():
    """
    Database session dependency for FastAPI.
    Automatically handles session creation and cleanup.

    Usage:
        @router.get("/endpoint")
        def endpoint(db: Session = Depends(get_db)):
            # Use db here
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping_database(bind: Engine = engine) -> None:
    """Run a trivial statement so startup fails fast on a bad DATABASE_URL"""
    with bind.connect() as conn:
        conn.execute(text("SELECT 1"))


def dispose_engine(bind: Engine = engine) -> None:
    """Release every pooled connection (called on shutdown)"""
    bind.dispose()
