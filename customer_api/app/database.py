import logging
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from .services.error_handling import DatabaseError, ServiceError
from .config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _connect_args(database_url: str) -> dict:
    # SQLite connections are shared across the request thread pool
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db():
    """
    Create all tables known to the ORM metadata.
    """
    # Model modules register themselves on Base.metadata when imported
    from .models import customer  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables initialized")


def get_db():
    """
    FastAPI dependency yielding one session per request.
    Commits on success or rolls back on exception.

    Yields:
        A SQLAlchemy session
    """
    with get_db_transaction() as session:
        yield session


@contextmanager
def get_db_transaction(session_factory=None):
    """
    Context manager for database transactions.
    Automatically commits on success or rolls back on exception.

    Args:
        session_factory: Optional sessionmaker, defaults to SessionLocal

    Yields:
        A SQLAlchemy session

    Raises:
        DatabaseError: If a database error occurs
        Other exceptions are passed through unchanged
    """
    factory = session_factory or SessionLocal
    session = factory()
    try:
        yield session
        session.commit()
    except ServiceError:
        # Pass through service errors like NotFoundError without wrapping them
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database transaction error: {str(e)}", exc_info=True)
        raise DatabaseError(f"Database transaction error: {str(e)}", original_error=e)
    except Exception:
        session.rollback()
        raise
    finally:
        try:
            session.close()
        except SQLAlchemyError as e:
            logger.warning(f"Error closing database session: {str(e)}")
