import functools
import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


def log_execution_time(func: Callable) -> Callable:
    """Log how long the wrapped call took, including failed calls."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(f"{func.__qualname__} executed in {elapsed_ms:.2f} ms")

    return wrapper
