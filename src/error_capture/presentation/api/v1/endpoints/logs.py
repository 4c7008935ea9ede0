"""Structured logger endpoints."""

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response, status

from .....application.dtos import LogStats
from .....application.interfaces import EnvironmentSnapshot
from .....core.exceptions import InvalidLogDataError
from .....domain.entities import LogEntry
from .....domain.enums import LogLevel
from .....infrastructure.logging import StructuredLogger
from ....dependencies import get_environment, get_structured_logger
from ....schemas import ImportResult, LoggerConfigResponse, LoggerConfigUpdate

router = APIRouter()


@router.get("", response_model=list[LogEntry])
async def list_logs(
    level: LogLevel | None = Query(None),
    structured_logger: StructuredLogger = Depends(get_structured_logger),
) -> list[LogEntry]:
    """List buffered log entries in append order, optionally of one level."""
    return structured_logger.get_logs(level)


@router.get("/stats", response_model=LogStats)
async def log_stats(structured_logger: StructuredLogger = Depends(get_structured_logger)) -> LogStats:
    return structured_logger.get_stats()


@router.get("/export")
async def export_logs(
    structured_logger: StructuredLogger = Depends(get_structured_logger),
    environment: EnvironmentSnapshot = Depends(get_environment),
) -> Response:
    filename = f"structured-logs-{environment.now().date().isoformat()}.json"
    return Response(
        content=structured_logger.export_logs(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResult)
async def import_logs(
    request: Request, structured_logger: StructuredLogger = Depends(get_structured_logger)
) -> ImportResult:
    try:
        raw = (await request.body()).decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidLogDataError(details={"reason": "body is not UTF-8"}) from e
    structured_logger.import_logs(raw)
    return ImportResult(imported=len(structured_logger.get_logs()))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_logs(structured_logger: StructuredLogger = Depends(get_structured_logger)) -> Response:
    structured_logger.clear_logs()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/config", response_model=LoggerConfigResponse, response_model_by_alias=True)
async def get_logger_config(
    structured_logger: StructuredLogger = Depends(get_structured_logger),
) -> LoggerConfigResponse:
    return LoggerConfigResponse.from_config(structured_logger.config)


@router.patch("/config", response_model=LoggerConfigResponse, response_model_by_alias=True)
async def update_logger_config(
    update: LoggerConfigUpdate = Body(...),
    structured_logger: StructuredLogger = Depends(get_structured_logger),
) -> LoggerConfigResponse:
    """Merge the sent fields into the live configuration. Existing entries are not re-filtered."""
    try:
        config = structured_logger.update_config(**update.changes())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e
    return LoggerConfigResponse.from_config(config)
