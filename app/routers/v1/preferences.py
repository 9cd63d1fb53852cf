from fastapi import APIRouter, Depends, HTTPException, Request

from app.constants.languages import SUPPORTED_LANGUAGES
from app.dependencies import get_services
from app.schemas.preferences import ApiKeyUpdate, PreferencesResponse, PreferencesUpdate

router = APIRouter(
    prefix="/preferences",
    tags=["Preferences"]
)


async def _current(request: Request) -> PreferencesResponse:
    services = get_services(request)
    return PreferencesResponse(
        language=services.preferences.language,
        theme_mode=services.preferences.theme_mode,
        supported_languages=SUPPORTED_LANGUAGES,
        has_api_key=bool(await services.api_keys.resolve(services.settings.GEMINI_API_KEY)),
    )


@router.get("", response_model=PreferencesResponse)
async def read_preferences(request: Request):
    return await _current(request)


@router.put("", response_model=PreferencesResponse)
async def update_preferences(update: PreferencesUpdate, request: Request):
    preferences = get_services(request).preferences
    if update.language is not None:
        try:
            await preferences.set_language(update.language)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    if update.theme_mode is not None:
        await preferences.set_theme_mode(update.theme_mode)
    return await _current(request)


@router.put("/api-key", status_code=204)
async def save_api_key(update: ApiKeyUpdate, request: Request):
    try:
        await get_services(request).api_keys.save_key(update.api_key)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    get_services(request).reset_gemini()


@router.delete("/api-key", status_code=204)
async def delete_api_key(request: Request):
    await get_services(request).api_keys.delete_key()
    get_services(request).reset_gemini()
