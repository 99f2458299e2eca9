from fastapi import APIRouter
from . import customers, health

api_router = APIRouter()

# Include all route modules
api_router.include_router(customers.router)
api_router.include_router(health.router)
