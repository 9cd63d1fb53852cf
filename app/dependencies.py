from dataclasses import dataclass, field
from typing import Dict, Optional

from fastapi import Request

from app.config import Settings
from app.services.api_keys import ApiKeyStorage
from app.services.gemini import GeminiService
from app.services.history import HistoryRepository
from app.services.preference_store import PreferenceStore
from app.services.preferences import AppPreferences


@dataclass
class AppServices:
    """Application-scoped collaborators, built once at startup."""
    settings: Settings
    store: PreferenceStore
    history: HistoryRepository
    preferences: AppPreferences
    api_keys: ApiKeyStorage
    gemini_services: Dict[Optional[str], GeminiService] = field(default_factory=dict)

    def gemini_for(self, api_key: Optional[str]) -> GeminiService:
        """One GeminiService (and so one HTTP client) per API key."""
        service = self.gemini_services.get(api_key)
        if service is None:
            service = GeminiService(api_key=api_key)
            self.gemini_services[api_key] = service
        return service

    def reset_gemini(self):
        """Drop cached clients after the stored API key changes."""
        self.gemini_services.clear()


def get_services(request: Request) -> AppServices:
    return request.app.state.services


def get_history(request: Request) -> HistoryRepository:
    return get_services(request).history


def get_preferences(request: Request) -> AppPreferences:
    return get_services(request).preferences


async def get_gemini_service(request: Request) -> GeminiService:
    """Client for the stored API key, falling back to GEMINI_API_KEY."""
    services = get_services(request)
    api_key = await services.api_keys.resolve(services.settings.GEMINI_API_KEY)
    return services.gemini_for(api_key)
