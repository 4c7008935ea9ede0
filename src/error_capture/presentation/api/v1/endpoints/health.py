"""Health check endpoint."""

from fastapi import APIRouter, Depends, status

from .....application.interfaces import EnvironmentSnapshot
from .....application.services import ErrorLedger
from .....core.config import Settings
from .....infrastructure.logging import StructuredLogger
from ....dependencies import get_app_settings, get_environment, get_error_ledger, get_structured_logger
from ....schemas import HealthResponse

router = APIRouter()


@router.get("", status_code=status.HTTP_200_OK, response_model=HealthResponse, response_model_by_alias=True)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    ledger: ErrorLedger = Depends(get_error_ledger),
    structured_logger: StructuredLogger = Depends(get_structured_logger),
    environment: EnvironmentSnapshot = Depends(get_environment),
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT.value,
        timestamp=environment.now(),
        ledger=ledger.counts(),
        session_id=structured_logger.session_id,
    )
