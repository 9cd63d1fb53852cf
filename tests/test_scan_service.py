import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock

from PIL import Image

from app.exceptions import RemoteServiceError, UserCancelled
from app.schemas.scan import ScanMode
from app.services.history import HistoryRepository
from app.services.image import ImageService
from app.services.preference_store import PreferenceStore
from app.services.scan import ScanService
from tests.helpers import fake_gemini, jpeg_bytes


class TestScanService(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.history = HistoryRepository(PreferenceStore())

    async def asyncTearDown(self):
        self.tmp.cleanup()

    async def test_scan_stores_result_and_image(self):
        scanner = ScanService(self.history, fake_gemini("Name: Aloe\nWater: Rarely"), image_dir=self.tmp.name)
        result = await scanner.scan(jpeg_bytes(), filename="photo.png")

        self.assertEqual(result.plant_name, "Aloe")
        self.assertEqual(self.history.items, [result])
        self.assertTrue(Path(result.image_path).exists())
        self.assertTrue(Path(result.image_path).name.startswith("photo-"))

    async def test_scan_without_image_dir(self):
        scanner = ScanService(self.history, fake_gemini("Disease: Mildew"))
        result = await scanner.scan(jpeg_bytes(), mode=ScanMode.DIAGNOSE)
        self.assertIsNone(result.image_path)
        self.assertIsNone(result.plant_name)

    async def test_empty_upload_is_cancelled(self):
        gemini = fake_gemini("Name: Aloe")
        with self.assertRaises(UserCancelled):
            await ScanService(self.history, gemini).scan(b"")
        gemini.client.aio.models.generate_content.assert_not_awaited()
        self.assertEqual(self.history.items, [])

    async def test_remote_failure_leaves_history_untouched(self):
        await ScanService(self.history, fake_gemini("Name: Aloe")).scan(jpeg_bytes())
        before = list(self.history.items)
        with self.assertRaises(RemoteServiceError):
            await ScanService(self.history, fake_gemini(error=ConnectionError("offline"))).scan(jpeg_bytes())
        self.assertEqual(self.history.items, before)

    async def test_failed_scan_keeps_no_image(self):
        scanner = ScanService(self.history, fake_gemini(error=ConnectionError("offline")), image_dir=self.tmp.name)
        with self.assertRaises(RemoteServiceError):
            await scanner.scan(jpeg_bytes(), filename="x.jpg")
        self.assertEqual(list(Path(self.tmp.name).iterdir()), [])
        self.assertEqual(self.history.items, [])

    async def test_failed_history_save_removes_image(self):
        self.history.store.set_string_list = AsyncMock(side_effect=OSError("disk full"))
        scanner = ScanService(self.history, fake_gemini("Name: Aloe"), image_dir=self.tmp.name)
        with self.assertRaises(OSError):
            await scanner.scan(jpeg_bytes(), filename="x.jpg")
        self.assertEqual(list(Path(self.tmp.name).iterdir()), [])

    async def test_undecodable_upload_keeps_declared_mime_type(self):
        gemini = fake_gemini("Name: Aloe")
        raw = b"\x00\x00\x00\x18ftypheic-bytes"
        result = await ScanService(self.history, gemini, image_dir=self.tmp.name).scan(
            raw, filename="leaf.heic", content_type="image/heic"
        )
        part = gemini.client.aio.models.generate_content.call_args.kwargs["contents"][1]
        self.assertEqual(part.inline_data.mime_type, "image/heic")
        self.assertEqual(part.inline_data.data, raw)
        self.assertFalse(result.image_path.endswith(".jpg"))

    async def test_decodable_upload_is_sent_as_jpeg(self):
        gemini = fake_gemini("Name: Aloe")
        await ScanService(self.history, gemini).scan(jpeg_bytes(), content_type="image/png")
        part = gemini.client.aio.models.generate_content.call_args.kwargs["contents"][1]
        self.assertEqual(part.inline_data.mime_type, "image/jpeg")


class TestImageService(unittest.TestCase):
    def test_png_with_alpha_becomes_jpeg(self):
        import io
        buffer = io.BytesIO()
        Image.new("RGBA", (4, 4), (10, 20, 30, 128)).save(buffer, format="PNG")
        converted = ImageService.to_jpeg(buffer.getvalue())
        self.assertEqual(Image.open(io.BytesIO(converted)).format, "JPEG")

    def test_undecodable_bytes_pass_through(self):
        self.assertIsNone(ImageService.to_jpeg(b"not an image"))
        self.assertEqual(ImageService.prepare_upload(b"not an image", "image/webp"), (b"not an image", "image/webp"))
        self.assertEqual(ImageService.prepare_upload(b"not an image"), (b"not an image", "image/jpeg"))

    def test_save_local_failure_returns_none(self):
        with tempfile.NamedTemporaryFile() as blocker:
            # A regular file cannot act as a parent directory
            self.assertIsNone(ImageService.save_local(b"x", str(Path(blocker.name) / "sub")))


if __name__ == '__main__':
    unittest.main()
