"""Models for design context, score reports and the client-owned chat transcript."""

from typing import List, Optional, Union
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DesignContext(BaseModel):
    """Free-text context and optional reference URL for one critique request."""

    model_config = ConfigDict(frozen=True)

    userContext: str = ""
    figmaUrl: Optional[str] = None

    @property
    def has_user_context(self) -> bool:
        return bool(self.userContext and self.userContext.strip())


class ConfidenceLevel(str, Enum):
    """Model's self-reported confidence in its scores."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


Number = Union[int, float]


class DesignMetrics(BaseModel):
    """
    The five fixed critique dimensions, nominally scored 0-10.

    Values are kept exactly as the model reported them; fractional or
    out-of-range scores are not corrected.
    """
    infoArchitecture: Number
    visualHierarchy: Number
    layoutSpacing: Number
    accessibility: Number
    usability: Number


class ScoreReport(BaseModel):
    """
    Structured score block emitted by the model ahead of its critique.

    overallScore (nominally 0-100) is reported by the model independently of
    the metrics and is never recomputed from them.
    """
    overallScore: Number
    confidence: str
    metrics: DesignMetrics

    @field_validator("confidence", mode="before")
    @classmethod
    def normalize_confidence(cls, value):
        # "high" / "HIGH" read as High; any other label is kept as given
        if isinstance(value, str):
            for level in ConfidenceLevel:
                if value.strip().lower() == level.value.lower():
                    return level.value
        return value


class ChatRole(str, Enum):
    """Speaker of a transcript turn."""
    USER = "user"
    MODEL = "model"


class ChatMessage(BaseModel):
    """A single transcript turn."""
    role: ChatRole
    text: str

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value):
        # "assistant" is the usual name for the model side of a chat
        if isinstance(value, str) and value.lower() == "assistant":
            return ChatRole.MODEL
        return value


class ChatSession(BaseModel):
    """
    Transcript plus the original image and context for one analysis result.

    The server keeps no session state. The caller owns this object and sends
    its contents with every chat request; it is discarded on reset.
    """
    history: List[ChatMessage] = Field(default_factory=list)
    lastContext: DesignContext = Field(default_factory=DesignContext)
    lastImage: Optional[str] = None

    def add_user_message(self, text: str) -> ChatMessage:
        """Append the user's message before the model has replied."""
        message = ChatMessage(role=ChatRole.USER, text=text)
        self.history.append(message)
        return message

    def add_model_reply(self, text: str) -> ChatMessage:
        """Append the model's reply once the response has arrived."""
        message = ChatMessage(role=ChatRole.MODEL, text=text)
        self.history.append(message)
        return message

    def prior_history(self) -> List[ChatMessage]:
        """Transcript to replay, excluding a trailing unanswered user message."""
        if self.history and self.history[-1].role == ChatRole.USER:
            return list(self.history[:-1])
        return list(self.history)

    def reset(self) -> None:
        self.history = []
        self.lastContext = DesignContext()
        self.lastImage = None
