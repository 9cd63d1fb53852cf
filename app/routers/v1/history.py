from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import FileResponse
from typing import Any, Dict, List

from app.dependencies import get_history, get_services
from app.exceptions import DuplicateRecord, RecordNotFound
from app.routers.v1.views import result_view
from app.schemas.scan import ScanResult, ScanResultResponse, ShareResponse
from app.services.export import export_history
from app.services.history import HistoryRepository
from app.services.parser import compose_share_text

router = APIRouter(
    prefix="/history",
    tags=["History"]
)


def _get_or_404(history: HistoryRepository, index: int) -> ScanResult:
    try:
        return history.get(index)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=List[ScanResultResponse])
async def list_history(history: HistoryRepository = Depends(get_history)):
    return [result_view(i, item) for i, item in enumerate(history.snapshot())]


@router.delete("", status_code=204)
async def clear_history(history: HistoryRepository = Depends(get_history)):
    await history.clear()


@router.get("/export")
async def export(request: Request, history: HistoryRepository = Depends(get_history)):
    """Download the whole history as a pretty-printed JSON array."""
    path = export_history(history.snapshot(), get_services(request).settings.EXPORT_DIR)
    return FileResponse(path, media_type="application/json", filename=path.name)


@router.get("/{index}", response_model=ScanResultResponse)
async def get_record(index: int, history: HistoryRepository = Depends(get_history)):
    return result_view(index, _get_or_404(history, index))


@router.delete("/{index}")
async def delete_record(index: int, history: HistoryRepository = Depends(get_history)) -> Dict[str, Any]:
    """Removes a record and returns it so the client can offer an undo."""
    _get_or_404(history, index)
    removed = await history.remove_at(index)
    return removed.to_json()


@router.post("/{index}/undo", response_model=ScanResultResponse)
async def undo_delete(index: int, record: Dict[str, Any], history: HistoryRepository = Depends(get_history)):
    """Puts a previously deleted record back at its original position."""
    restored = ScanResult.from_json(record)
    try:
        position = await history.restore(index, restored)
    except DuplicateRecord as e:
        raise HTTPException(status_code=409, detail=str(e))
    return result_view(position, restored)


@router.post("/{index}/favorite", response_model=ScanResultResponse)
async def toggle_favorite(index: int, history: HistoryRepository = Depends(get_history)):
    _get_or_404(history, index)
    updated = await history.toggle_favorite(index)
    return result_view(index, updated)


@router.get("/{index}/share", response_model=ShareResponse)
async def share_record(index: int, history: HistoryRepository = Depends(get_history)):
    record = _get_or_404(history, index)
    return ShareResponse(text=compose_share_text(record), image_path=record.image_path)
