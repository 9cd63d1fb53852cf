import logging
from typing import Callable, List, Optional

from app.constants.languages import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, normalize_language
from app.constants.storage_keys import LANGUAGE_KEY, THEME_MODE_KEY
from app.schemas.preferences import ThemeMode
from app.services.preference_store import PreferenceStore

logger = logging.getLogger(__name__)

Listener = Callable[["AppPreferences"], None]


class AppPreferences:
    """
    Application-scoped display preferences (language and theme).

    Loaded once at startup; every setter persists the new value and then
    notifies subscribers.
    """

    def __init__(self, store: PreferenceStore):
        self.store = store
        self.language: str = DEFAULT_LANGUAGE
        self.theme_mode: ThemeMode = ThemeMode.SYSTEM
        self._listeners: List[Listener] = []

    async def load(self):
        stored_language = await self.store.get_string(LANGUAGE_KEY)
        self.language = normalize_language(stored_language) or DEFAULT_LANGUAGE

        stored_theme = await self.store.get_string(THEME_MODE_KEY)
        try:
            self.theme_mode = ThemeMode(stored_theme)
        except ValueError:
            self.theme_mode = ThemeMode.SYSTEM
        logger.info(f"Preferences loaded: language={self.language}, theme={self.theme_mode.value}")

    async def set_language(self, language_name: str):
        language = normalize_language(language_name)
        if language is None:
            raise ValueError(f"Unsupported language '{language_name}'. Choose one of: {', '.join(SUPPORTED_LANGUAGES)}")
        await self.store.set_string(LANGUAGE_KEY, language)
        self.language = language
        self._notify()

    async def set_theme_mode(self, mode: ThemeMode):
        mode = ThemeMode(mode)
        await self.store.set_string(THEME_MODE_KEY, mode.value)
        self.theme_mode = mode
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)
