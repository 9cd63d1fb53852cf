from typing import Optional

from fastapi import FastAPI
from app.config import Settings, init_settings
from app.dependencies import AppServices
from app.routers.v1.scan import router as scan_router
from app.routers.v1.history import router as history_router
from app.routers.v1.translation import router as translation_router
from app.routers.v1.preferences import router as preferences_router
from app.services.api_keys import ApiKeyStorage
from app.services.history import HistoryRepository
from app.services.preference_store import PreferenceStore, create_preference_store
from app.services.preferences import AppPreferences
import logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[PreferenceStore] = None) -> FastAPI:
    settings = settings or init_settings()
    store = store or create_preference_store(settings.REDIS_URL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json"
    )

    # History and preferences are loaded once, before the first request
    @app.on_event("startup")
    async def startup():
        await store.connect()
        services = AppServices(
            settings=settings,
            store=store,
            history=HistoryRepository(store, key=settings.HISTORY_KEY),
            preferences=AppPreferences(store),
            api_keys=ApiKeyStorage(store),
        )
        await services.history.load()
        await services.preferences.load()
        services.preferences.subscribe(
            lambda prefs: logger.info(f"Preferences changed: language={prefs.language}, theme={prefs.theme_mode.value}")
        )
        app.state.services = services

    @app.on_event("shutdown")
    async def shutdown():
        await store.close()

    app.include_router(scan_router, prefix=settings.API_V1_STR, tags=["scan"])
    app.include_router(history_router, prefix=settings.API_V1_STR)
    app.include_router(translation_router, prefix=settings.API_V1_STR)
    app.include_router(preferences_router, prefix=settings.API_V1_STR)

    @app.get("/")
    async def read_index():
        return {"message": "Plant Scanner API is running"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "store": store.backend}

    return app


app = create_app()
