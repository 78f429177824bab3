"""Models for design critique responses."""

from typing import Optional

from pydantic import BaseModel

from app.models.design_models import ScoreReport
from app.models.request_models import ThemeMode


class AnalysisResponse(BaseModel):
    """Markdown critique plus the score block, when one could be parsed."""
    text: str
    scores: Optional[ScoreReport] = None


class ChatResponse(BaseModel):
    """
    Model reply to a chat turn.

    text is the reply verbatim; displayText has the first html fence removed
    and mockupHtml carries that fence's content.
    """
    text: str
    displayText: str
    mockupHtml: Optional[str] = None


class ThemeDecision(BaseModel):
    """Chosen theme and the rule that chose it."""
    theme: ThemeMode
    reason: str
