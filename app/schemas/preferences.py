from pydantic import BaseModel
from typing import Optional, List
from enum import Enum


class ThemeMode(str, Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"


class PreferencesResponse(BaseModel):
    language: str
    theme_mode: ThemeMode
    supported_languages: List[str]
    has_api_key: bool


class PreferencesUpdate(BaseModel):
    language: Optional[str] = None
    theme_mode: Optional[ThemeMode] = None


class ApiKeyUpdate(BaseModel):
    api_key: str
