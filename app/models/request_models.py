"""Models for request payloads of the design critique endpoints."""
from typing import List, Optional, Literal

from pydantic import BaseModel, Field

from app.models.design_models import ChatMessage, DesignContext

ThemeMode = Literal["day", "night"]


class AnalysisRequest(BaseModel):
    """Model for a design analysis request."""
    imageBase64: Optional[str] = None
    context: DesignContext = Field(default_factory=DesignContext)
    themeMode: ThemeMode = "day"


class ChatRequest(BaseModel):
    """
    Model for a follow-up chat request.

    history holds the turns before the new message; the image and context of
    the original analysis are sent again on every turn.
    """
    history: List[ChatMessage] = Field(default_factory=list)
    message: str
    imageBase64: Optional[str] = None
    context: DesignContext = Field(default_factory=DesignContext)


class ThemeRequest(BaseModel):
    """Inputs to the theme decision; all of them optional."""
    localHour: Optional[int] = Field(default=None, ge=0, le=23)
    userPreference: Optional[ThemeMode] = None
    systemTheme: Optional[Literal["light", "dark"]] = None
    # Raw values persisted by older clients, used when userPreference is unset
    storedPreference: Optional[str] = None
    legacyTheme: Optional[str] = None
