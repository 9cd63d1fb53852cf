from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
import io

from PIL import Image

from app.services.gemini import GeminiService


def fake_gemini(text=None, error=None) -> GeminiService:
    """GeminiService whose client answers every request with `text` (or raises `error`)."""
    client = MagicMock()
    if error is not None:
        client.aio.models.generate_content = AsyncMock(side_effect=error)
    else:
        client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text=text))
    return GeminiService(api_key="test-key", client=client)


def jpeg_bytes(color=(40, 160, 60), size=(8, 8)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="JPEG")
    return buffer.getvalue()
