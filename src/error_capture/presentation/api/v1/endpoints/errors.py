"""Error ledger endpoints: listing, resolution and transfer."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from .....application.dtos import LedgerCounts
from .....application.interfaces import EnvironmentSnapshot
from .....application.services import ErrorLedger
from .....core.exceptions import InvalidErrorDataError
from .....domain.entities import ErrorEntry
from .....domain.enums import ResolutionFilter
from ....dependencies import get_environment, get_error_ledger
from ....schemas import ImportResult

router = APIRouter()


def _entry_or_404(ledger: ErrorLedger, error_id: str) -> ErrorEntry:
    entry = ledger.get_error_by_id(error_id)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Error '{error_id}' not found")
    return entry


@router.get("", response_model=list[ErrorEntry])
async def list_errors(
    status_filter: ResolutionFilter = Query(ResolutionFilter.ALL, alias="status"),
    ledger: ErrorLedger = Depends(get_error_ledger),
) -> list[ErrorEntry]:
    """List ledger entries, newest first."""
    return ledger.list(status_filter)


@router.get("/counts", response_model=LedgerCounts)
async def error_counts(ledger: ErrorLedger = Depends(get_error_ledger)) -> LedgerCounts:
    return ledger.counts()


@router.get("/export")
async def export_errors(
    ledger: ErrorLedger = Depends(get_error_ledger),
    environment: EnvironmentSnapshot = Depends(get_environment),
) -> Response:
    """Download the ledger as a versioned export file."""
    filename = f"error-logs-{environment.now().date().isoformat()}.json"
    return Response(
        content=ledger.export_errors(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResult)
async def import_errors(request: Request, ledger: ErrorLedger = Depends(get_error_ledger)) -> ImportResult:
    """Replace the ledger with the entries of an export file sent as the request body."""
    try:
        raw = (await request.body()).decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidErrorDataError(details={"reason": "body is not UTF-8"}) from e
    ledger.import_errors(raw)
    return ImportResult(imported=len(ledger.list()))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_errors(ledger: ErrorLedger = Depends(get_error_ledger)) -> Response:
    ledger.clear_errors()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{error_id}", response_model=ErrorEntry)
async def get_error(error_id: str, ledger: ErrorLedger = Depends(get_error_ledger)) -> ErrorEntry:
    return _entry_or_404(ledger, error_id)


@router.post("/{error_id}/resolve", response_model=ErrorEntry)
async def resolve_error(error_id: str, ledger: ErrorLedger = Depends(get_error_ledger)) -> ErrorEntry:
    """Mark an entry resolved. Resolving a resolved entry is a no-op."""
    ledger.resolve_error(error_id)
    return _entry_or_404(ledger, error_id)


@router.delete("/{error_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_error(error_id: str, ledger: ErrorLedger = Depends(get_error_ledger)) -> Response:
    if not ledger.remove_error(error_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Error '{error_id}' not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
