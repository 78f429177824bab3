"""Day/night theme selection for the critique UI."""

from datetime import datetime
from typing import Optional

from app.models.response_models import ThemeDecision

DAY_START_HOUR = 7
DAY_END_HOUR = 18


def determine_theme(
    local_hour: Optional[int] = None,
    user_preference: Optional[str] = None,
    system_theme: Optional[str] = None,
) -> ThemeDecision:
    """
    Decide between day and night mode.

    Precedence: explicit user preference, then the system colour scheme, then
    the local hour (7-18 inclusive is day).
    """
    if user_preference == "day":
        return ThemeDecision(theme="day", reason="User explicitly prefers day mode.")
    if user_preference == "night":
        return ThemeDecision(theme="night", reason="User explicitly prefers night mode.")

    if system_theme == "light":
        return ThemeDecision(
            theme="day",
            reason="No user preference, light system theme maps to day mode.",
        )
    if system_theme == "dark":
        return ThemeDecision(
            theme="night",
            reason="No user preference, dark system theme maps to night mode.",
        )

    if local_hour is None:
        local_hour = datetime.now().hour

    if DAY_START_HOUR <= local_hour <= DAY_END_HOUR:
        return ThemeDecision(
            theme="day",
            reason=f"No preference or system theme, time is between {DAY_START_HOUR}-{DAY_END_HOUR}.",
        )
    return ThemeDecision(
        theme="night",
        reason=f"No preference or system theme, time is outside {DAY_START_HOUR}-{DAY_END_HOUR}.",
    )


def resolve_stored_preference(
    saved: Optional[str], legacy: Optional[str] = None
) -> Optional[str]:
    """
    Map persisted preference values to a theme preference.

    `saved` uses day/night. `legacy` is the older light/dark/system setting
    and is only consulted when `saved` holds nothing usable.
    """
    if saved in ("day", "night"):
        return saved
    if legacy == "light":
        return "day"
    if legacy == "dark":
        return "night"
    return None
