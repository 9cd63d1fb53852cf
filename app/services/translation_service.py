from app.exceptions import RemoteServiceError
from app.schemas.scan import ScanResult
from app.services.gemini import GeminiService
from app.services.history import HistoryRepository
import logging

logger = logging.getLogger(__name__)

class TranslationService:
    def __init__(self, history: HistoryRepository, gemini: GeminiService):
        self.history = history
        self.gemini = gemini

    async def translate_record(self, record: ScanResult, language_name: str) -> ScanResult:
        """
        Translates a stored record's summary and replaces the record in the
        history. On failure the stored summary stays exactly as it was.
        """
        # Re-read the current value; the caller's copy may be stale
        current = self.history.get(self.history.index_of(record.identity))
        try:
            translated = await self.gemini.translate_summary(current.summary, language_name)
        except RemoteServiceError as e:
            logger.error(f"Translation failed, keeping original summary: {e}")
            raise
        return await self.history.update_summary(current, translated)

    async def translate_at(self, index: int, language_name: str) -> ScanResult:
        return await self.translate_record(self.history.get(index), language_name)
