import logging
import functools
import inspect
from fastapi import status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Optional, Dict, Any, Callable

logger = logging.getLogger(__name__)

class ServiceError(Exception):

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(message)

class NotFoundError(ServiceError):

    def __init__(self, resource_type: str, field_name: str, value: Any, details: Optional[Dict[str, Any]] = None):
        message = f"{resource_type} not found with {field_name}: '{value}'"
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=f"{resource_type.upper()}_NOT_FOUND",
            details=details
        )

class ResourceAlreadyExistsError(ServiceError):
    """A resource with the same unique value is already stored."""

    def __init__(self, resource_type: str, field_name: str, value: Any, details: Optional[Dict[str, Any]] = None):
        message = f"{resource_type} already exists with {field_name}: '{value}'"
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="RESOURCE_ALREADY_EXISTS",
            details=details or {"field": field_name}
        )

class DatabaseError(ServiceError):
    """Database-related errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None, details: Optional[Dict[str, Any]] = None):
        error_details = details or {}
        if original_error:
            error_details["error_type"] = type(original_error).__name__

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="DATABASE_ERROR",
            details=error_details
        )

def handle_service_error(func: Callable) -> Callable:
    """
    Decorator for service functions.

    Service errors pass through untouched, SQLAlchemy errors are logged and
    re-raised as DatabaseError, anything else is logged and propagated.
    """
    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except ServiceError:
                raise
            except SQLAlchemyError as e:
                raise _to_database_error(func, e) from e
            except Exception as e:
                logger.error(f"Unhandled error in {func.__name__}: {str(e)}", exc_info=True)
                raise
        return async_wrapper

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ServiceError:
            raise
        except SQLAlchemyError as e:
            raise _to_database_error(func, e) from e
        except Exception as e:
            logger.error(f"Unhandled error in {func.__name__}: {str(e)}", exc_info=True)
            raise
    return sync_wrapper

def _to_database_error(func: Callable, error: SQLAlchemyError) -> DatabaseError:
    if isinstance(error, IntegrityError):
        logger.error(f"Integrity violation in {func.__name__}: {str(error.orig)}")
    else:
        logger.error(f"Database error in {func.__name__}: {str(error)}", exc_info=True)
    return DatabaseError(f"Database error in {func.__name__}", original_error=error)
