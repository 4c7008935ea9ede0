"""Manual failure reports from clients."""

from fastapi import APIRouter, Depends, Request, status

from .....application.services import CaptureService
from ....dependencies import get_capture_service
from ....schemas import ReportAccepted, ReportRequest

router = APIRouter()


@router.post("", status_code=status.HTTP_202_ACCEPTED, response_model=ReportAccepted)
async def submit_report(
    report: ReportRequest,
    request: Request,
    capture: CaptureService = Depends(get_capture_service),
) -> ReportAccepted:
    """Record a client-reported failure through the capture entry point."""
    context = dict(report.context or {})
    context.setdefault("requestId", getattr(request.state, "request_id", None))
    capture.capture_message(report.message, context, name=report.name, stack=report.stack)
    return ReportAccepted()
