"""Quote and translation routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..services.container import MindBridge, get_app_state

router = APIRouter(prefix="/api", tags=["Quotes"])


@router.get("/quotes/random")
async def get_random_quote(
    lang: Optional[str] = Query(default=None, description="Language code; defaults to the selected language"),
    state: MindBridge = Depends(get_app_state),
):
    language = state.quotes.resolve_language(lang or state.translations.current_language)
    return {"language": language, "quote": await state.quotes.random_quote(language)}


@router.put("/language/{lang}")
async def select_language(lang: str, state: MindBridge = Depends(get_app_state)):
    """Switch language; unsupported or unavailable languages fall back to English."""
    await state.translations.load(lang)
    return {"language": state.translations.current_language}


@router.get("/translations/{key}")
async def get_translation(key: str, state: MindBridge = Depends(get_app_state)):
    """Look up one dotted translation key in the selected language."""
    if not state.translations.is_ready:
        await state.translations.load(state.translations.current_language)
    return {
        "language": state.translations.current_language,
        "key": key,
        "text": state.translations.get_text(key),
    }
