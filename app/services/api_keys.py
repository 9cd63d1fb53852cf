from typing import Optional

from app.constants.storage_keys import API_KEY_KEY
from app.services.preference_store import PreferenceStore


class ApiKeyStorage:
    """Stored Gemini API key; takes precedence over GEMINI_API_KEY when set."""

    def __init__(self, store: PreferenceStore):
        self.store = store

    async def save_key(self, api_key: str):
        api_key = api_key.strip()
        if not api_key:
            raise ValueError("API key cannot be empty")
        await self.store.set_string(API_KEY_KEY, api_key)

    async def read_key(self) -> Optional[str]:
        return await self.store.get_string(API_KEY_KEY)

    async def delete_key(self):
        await self.store.delete(API_KEY_KEY)

    async def resolve(self, fallback: Optional[str]) -> Optional[str]:
        return await self.read_key() or fallback
