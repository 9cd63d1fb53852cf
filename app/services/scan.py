import logging
from typing import Optional

from app.exceptions import UserCancelled
from app.schemas.scan import ScanMode, ScanResult
from app.services.gemini import GeminiService
from app.services.history import HistoryRepository
from app.services.image import image_service

logger = logging.getLogger(__name__)


class ScanService:
    """
    Scan workflow:
    1. Empty upload -> UserCancelled (nothing happens).
    2. Normalise to JPEG when Pillow can read the upload.
    3. Identify / diagnose with Gemini.
    4. Keep a local copy of the image (optional, failure is tolerated).
    5. Insert the result at the top of the history.

    Any failure leaves the history untouched and no image behind.
    """

    def __init__(self, history: HistoryRepository, gemini: GeminiService, image_dir: Optional[str] = None, image_quality: int = 85):
        self.history = history
        self.gemini = gemini
        self.image_dir = image_dir
        self.image_quality = image_quality

    async def scan(
        self,
        image_bytes: bytes,
        mode: ScanMode = ScanMode.IDENTIFY,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> ScanResult:
        if not image_bytes:
            raise UserCancelled("No image selected")

        payload, mime_type = image_service.prepare_upload(image_bytes, content_type, quality=self.image_quality)
        result = await self.gemini.identify_plant(payload, mode=mode, mime_type=mime_type)

        image_path = image_service.save_local(payload, self.image_dir, filename, mime_type) if self.image_dir else None
        if image_path:
            result = result.model_copy(update={"image_path": image_path})

        try:
            await self.history.add(result)
        except Exception:
            image_service.discard_local(image_path)
            raise
        logger.info(f"Scan stored: mode={mode.value} name={result.plant_name!r}")
        return result
