from fastapi import APIRouter

from booksphere.config import get_settings
from booksphere.core import container
from booksphere.infrastructure.common.schemas import HealthResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness check with the number of live websocket sessions."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        service=settings.PROJECT_NAME,
        version=settings.VERSION,
        active_sessions=container.session_registry().session_count,
    )
