from fastapi import APIRouter, Depends, HTTPException
from typing import Optional

from app.dependencies import get_gemini_service, get_history, get_preferences
from app.constants.languages import normalize_language
from app.exceptions import RecordNotFound, RemoteServiceError
from app.routers.v1.views import result_view
from app.schemas.scan import ScanResultResponse, TranslateRequest
from app.services.gemini import GeminiService
from app.services.history import HistoryRepository
from app.services.preferences import AppPreferences
from app.services.translation_service import TranslationService
import logging

router = APIRouter(
    prefix="/translation",
    tags=["Translation"]
)

logger = logging.getLogger(__name__)


@router.post("/{index}", response_model=ScanResultResponse)
async def translate_record(
    index: int,
    payload: Optional[TranslateRequest] = None,
    history: HistoryRepository = Depends(get_history),
    preferences: AppPreferences = Depends(get_preferences),
    gemini: GeminiService = Depends(get_gemini_service),
):
    """
    Translates the values of a stored summary into the requested language
    (or the saved display language) and stores the translated summary.
    """
    requested = payload.language if payload and payload.language else preferences.language
    language = normalize_language(requested)
    if language is None:
        raise HTTPException(status_code=400, detail=f"Unsupported language '{requested}'")

    try:
        updated = await TranslationService(history, gemini).translate_at(index, language)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RemoteServiceError as e:
        raise HTTPException(status_code=502, detail=f"Translate failed: {e}")

    return result_view(index, updated)
