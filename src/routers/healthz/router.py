import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.config.database import async_session_manager

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    database: str
    version: str = "0.1.0"


class DatabaseCheck:
    async def __call__(self) -> bool:
        try:
            async with async_session_manager(auto_commit=False) as session:
                await session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database health check failed: %s", e)
            return False
        return True


def get_database_check() -> DatabaseCheck:
    return DatabaseCheck()


@router.get("/", response_model=HealthCheckResponse)
async def health_check(check: DatabaseCheck = Depends(get_database_check)) -> HealthCheckResponse:
    """
    Health check endpoint to verify the API is running.
    The API still answers when the database is down, reporting itself degraded.
    """
    if await check():
        return HealthCheckResponse(status="healthy", database="ok")
    return HealthCheckResponse(status="degraded", database="unavailable")
