from pydantic import BaseModel, Field
from typing import Optional, Tuple, Dict, Any, List
from datetime import datetime, timezone
from enum import Enum
import json

from app.exceptions import MalformedPersistedRecord


class ScanMode(str, Enum):
    IDENTIFY = "identify"
    DIAGNOSE = "diagnose"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string, returning None when it is missing or invalid"""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class ScanResult(BaseModel):
    """
    One completed scan.

    Records are immutable; favourite toggles and translations produce a new
    record which replaces the old one at its position in the history.
    """
    plant_name: Optional[str] = Field(None, alias="plantName")
    summary: str
    timestamp: datetime = Field(default_factory=utc_now)
    image_path: Optional[str] = Field(None, alias="imagePath")
    is_favorite: bool = Field(False, alias="isFavorite")
    tags: Tuple[str, ...] = ()

    class Config:
        frozen = True
        populate_by_name = True

    @property
    def identity(self) -> Tuple[datetime, Optional[str]]:
        return (self.timestamp, self.image_path)

    def with_favorite_toggled(self) -> "ScanResult":
        return self.model_copy(update={"is_favorite": not self.is_favorite})

    def with_summary(self, summary: str) -> "ScanResult":
        return self.model_copy(update={"summary": summary})

    # --- Record encoding ---

    def to_json(self) -> Dict[str, Any]:
        return {
            "plantName": self.plant_name,
            "summary": self.summary,
            "timestamp": self.timestamp.isoformat(),
            "imagePath": self.image_path,
            "isFavorite": self.is_favorite,
            "tags": list(self.tags),
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ScanResult":
        """
        Build a record from its JSON object, falling back field by field:
        summary -> "", timestamp -> now, isFavorite -> False, tags -> [].
        """
        if not isinstance(data, dict):
            raise MalformedPersistedRecord(f"Expected a JSON object, got {type(data).__name__}")

        plant_name = data.get("plantName")
        summary = data.get("summary")
        image_path = data.get("imagePath")
        is_favorite = data.get("isFavorite")
        tags = data.get("tags")

        return cls(
            plant_name=plant_name if isinstance(plant_name, str) else None,
            summary=summary if isinstance(summary, str) else "",
            timestamp=parse_timestamp(data.get("timestamp")) or utc_now(),
            image_path=image_path if isinstance(image_path, str) else None,
            is_favorite=is_favorite if isinstance(is_favorite, bool) else False,
            tags=tuple(t for t in tags if isinstance(t, str)) if isinstance(tags, list) else (),
        )

    def encode(self) -> str:
        return json.dumps(self.to_json(), ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def decode(cls, raw: str) -> "ScanResult":
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise MalformedPersistedRecord(f"Stored record is not valid JSON: {e}") from e
        return cls.from_json(data)


# --- API Payloads ---

class ScanResultResponse(BaseModel):
    index: int
    title: str
    fields: Dict[str, str]
    tips: List[str]
    relative_time: str
    record: Dict[str, Any]


class TranslateRequest(BaseModel):
    language: Optional[str] = Field(None, description="Target language name, defaults to the saved display language")


class ShareResponse(BaseModel):
    text: str
    image_path: Optional[str] = None
