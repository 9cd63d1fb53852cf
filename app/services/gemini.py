from google import genai
from google.genai import types
from typing import Optional
from app.config import init_settings
from app.constants.prompts import (
    IDENTIFY_PROMPT,
    DIAGNOSE_PROMPT,
    EMPTY_RESPONSE_PLACEHOLDER,
    translation_prompt,
)
from app.exceptions import RemoteServiceError
from app.schemas.scan import ScanMode, ScanResult, utc_now
import logging
import asyncio
import re

logger = logging.getLogger(__name__)

NAME_LINE = re.compile(r"^Name:\s*(.+)", re.IGNORECASE)


class GeminiService:
    """
    Thin wrapper around the Gemini API for plant identification, diagnosis
    and summary translation.

    Each call issues exactly one request. Failures are not retried; they are
    raised as RemoteServiceError so the caller can report them and leave its
    own state untouched.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client=None):
        settings = init_settings()
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.timeout = settings.GEMINI_TIMEOUT_SECONDS
        self.generation_config = types.GenerateContentConfig(
            temperature=settings.GEMINI_TEMPERATURE,
            top_p=settings.GEMINI_TOP_P,
            top_k=settings.GEMINI_TOP_K,
            candidate_count=1,
        )
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise RemoteServiceError("No Gemini API key configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def _generate(self, contents: list, purpose: str) -> str:
        """Send one request and return the trimmed response text ('' when empty)."""
        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.model,
                    contents=contents,
                    config=self.generation_config
                ),
                timeout=self.timeout
            )
        except RemoteServiceError:
            raise
        except asyncio.TimeoutError as e:
            logger.error(f"Gemini {purpose} timed out after {self.timeout}s")
            raise RemoteServiceError(f"{purpose.capitalize()} timed out, please try again") from e
        except Exception as e:
            logger.error(f"Gemini {purpose} failed: {e}")
            raise RemoteServiceError(f"{purpose.capitalize()} failed: {e}") from e

        text = getattr(response, "text", None)
        return text.strip() if isinstance(text, str) else ""

    async def identify_plant(
        self,
        image_data: bytes,
        mode: ScanMode = ScanMode.IDENTIFY,
        image_path: Optional[str] = None,
        mime_type: str = "image/jpeg",
    ) -> ScanResult:
        """
        Identifies the plant (or diagnoses its problem) in the image.

        The prompt always asks for English output; translating into the
        display language is a separate, on-demand step.
        """
        prompt = IDENTIFY_PROMPT if mode == ScanMode.IDENTIFY else DIAGNOSE_PROMPT
        content_part = types.Part.from_bytes(data=image_data, mime_type=mime_type)

        logger.info(f"Requesting {mode.value} from {self.model} ({len(image_data)} bytes)")
        text = await self._generate([prompt, content_part], purpose=mode.value)
        timestamp = utc_now()
        if not text:
            logger.warning("Gemini returned an empty response, using placeholder")
            text = EMPTY_RESPONSE_PLACEHOLDER

        plant_name = None
        if mode == ScanMode.IDENTIFY:
            lines = text.splitlines()
            first_line = lines[0] if lines else text
            match = NAME_LINE.match(first_line)
            if match:
                plant_name = match.group(1).strip() or None

        return ScanResult(
            plant_name=plant_name,
            summary=text,
            timestamp=timestamp,
            image_path=image_path,
        )

    async def translate_summary(self, summary: str, language_name: str) -> str:
        """
        Translates the values of a labeled summary into language_name while
        keeping the English labels. Returns the original summary when the
        model answers with nothing.
        """
        logger.info(f"Translating summary into {language_name}")
        text = await self._generate(
            [translation_prompt(language_name), f"<content>\n{summary}\n</content>"],
            purpose="translation",
        )
        return text or summary
