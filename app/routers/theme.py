"""FastAPI router exposing the day/night theme decision."""

from fastapi import APIRouter

from app.models.request_models import ThemeRequest
from app.models.response_models import ThemeDecision
from app.utils.theme import determine_theme, resolve_stored_preference

router = APIRouter()


@router.post("/theme", response_model=ThemeDecision)
async def decide_theme(request: ThemeRequest) -> ThemeDecision:
    """
    Pick day or night mode from the user's choice, system theme and local hour.

    Clients that only have a persisted setting can send it as storedPreference
    (day/night) or legacyTheme (light/dark/system).
    """
    user_preference = request.userPreference or resolve_stored_preference(
        request.storedPreference, request.legacyTheme
    )
    return determine_theme(
        local_hour=request.localHour,
        user_preference=user_preference,
        system_theme=request.systemTheme,
    )
