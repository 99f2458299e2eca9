import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from ..database import get_db
from ..services.health import check_system_health

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])

@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Public health check endpoint.

    No authentication required.
    """
    try:
        health_data = check_system_health(db)
        return {
            "status": "healthy",
            **health_data
        }
    except HTTPException as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "detail": e.detail
            }
        )
