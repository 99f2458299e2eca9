import logging
from fastapi import HTTPException, status
from sqlalchemy import text
from sqlalchemy.orm import Session
from ..config import settings

logger = logging.getLogger(__name__)

def check_system_health(session: Session):
    try:
        session.execute(text("SELECT 1"))
        dialect = session.get_bind().dialect.name

        return {
            "database": {
                "status": "connected",
                "dialect": dialect
            },
            "environment": settings.ENVIRONMENT,
            "version": settings.API_VERSION
        }

    except Exception as e:
        logger.error(f"Health check failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Health check failed"
        )
