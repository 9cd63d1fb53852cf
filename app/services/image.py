from PIL import Image, UnidentifiedImageError
from pathlib import Path
from typing import Optional, Tuple
from datetime import datetime
import io
import mimetypes
import uuid
import logging

logger = logging.getLogger(__name__)

JPEG_MIME = "image/jpeg"


class ImageService:
    @staticmethod
    def to_jpeg(image_bytes: bytes, quality: int = 85) -> Optional[bytes]:
        """Re-encodes an uploaded image as JPEG; None when Pillow cannot read it."""
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Could not decode image for re-encoding: {e}")
            return None

        output_buffer = io.BytesIO()
        if image.mode != 'RGB':
            image = image.convert('RGB')
        image.save(output_buffer, format="JPEG", quality=quality)
        return output_buffer.getvalue()

    @classmethod
    def prepare_upload(cls, image_bytes: bytes, content_type: Optional[str] = None, quality: int = 85) -> Tuple[bytes, str]:
        """
        Returns the bytes to send and their MIME type. Undecodable uploads are
        passed through with the type the client declared; the model decides
        whether it accepts them.
        """
        jpeg = cls.to_jpeg(image_bytes, quality=quality)
        if jpeg is not None:
            return jpeg, JPEG_MIME
        return image_bytes, content_type or JPEG_MIME

    @staticmethod
    def save_local(image_bytes: bytes, directory: str, original_filename: Optional[str] = None, mime_type: str = JPEG_MIME) -> Optional[str]:
        """Keeps a copy of the scanned image; returns its path or None if it could not be written."""
        stem = Path(original_filename).stem if original_filename else "scan"
        extension = ".jpg" if mime_type == JPEG_MIME else (mimetypes.guess_extension(mime_type) or ".img")
        timestamp_str = datetime.now().strftime("%Y%m%d%H%M%S")
        local_path = Path(directory) / f"{stem}-{timestamp_str}-{uuid.uuid4().hex[:8]}{extension}"
        try:
            local_path.parent.mkdir(parents=True, exist_ok=True)
            local_path.write_bytes(image_bytes)
        except OSError as e:
            logger.error(f"Could not retain scanned image at {local_path}: {e}")
            return None
        logger.info(f"Saved scanned image to {local_path}")
        return str(local_path)

    @staticmethod
    def discard_local(path: Optional[str]):
        if not path:
            return
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Could not remove scanned image {path}: {e}")

image_service = ImageService()
