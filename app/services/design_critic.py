"""Service for critiquing product designs and chatting about redesigns with an AI model."""

import logging
import time
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from app.models.design_models import ChatSession
from app.models.request_models import AnalysisRequest, ChatRequest
from app.models.response_models import AnalysisResponse, ChatResponse
from app.utils.config import Settings, get_settings
from app.utils.prompts import (
    build_analysis_parts,
    build_chat_parts,
    get_system_message,
)
from app.utils.response_parser import (
    extract_html_mockup,
    split_response,
    strip_html_mockup,
)

logger = logging.getLogger(__name__)

CHAT_ERROR_REPLY = "Sorry, I encountered an error communicating with the server."


class DesignCriticError(Exception):
    """Base class for failures that abort a critique or chat action."""


class MissingCredentialError(DesignCriticError):
    """Raised before any request when no API key is configured."""


class ModelServiceError(DesignCriticError):
    """Raised when the model call itself fails."""


class DesignCriticService:
    """
    Service to critique designs and generate redesign mockups.

    Every call is a single, independent round trip. No retries are made and
    no conversation state is kept between calls.
    """

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.settings.openai_api_key:
                raise MissingCredentialError("API Key is missing on server.")
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key, max_retries=0
            )
        return self._client

    async def _complete(self, parts: List[Dict[str, Any]]) -> str:
        """Send the system rubric plus content parts and return the reply text."""
        client = self.client

        try:
            response = await client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[
                    {"role": "system", "content": get_system_message()},
                    {"role": "user", "content": parts},
                ],
                temperature=self.settings.openai_temperature,
                max_tokens=self.settings.openai_max_tokens,
            )
        except OpenAIError as e:
            logger.error("Model request failed: %s", e)
            raise ModelServiceError(str(e) or "Model request failed") from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def analyze_design(self, request: AnalysisRequest) -> AnalysisResponse:
        """Critique a design and split the reply into scores and markdown."""
        start_time = time.time()

        parts = build_analysis_parts(
            request.imageBase64,
            request.context,
            request.themeMode,
            self.settings.default_image_mime_type,
        )
        full_text = await self._complete(parts)
        parsed = split_response(full_text)

        logger.info(
            "Design analysis finished in %d ms (scores parsed: %s)",
            int((time.time() - start_time) * 1000),
            parsed.scores is not None,
        )
        return AnalysisResponse(text=parsed.text, scores=parsed.scores)

    async def send_chat_message(self, request: ChatRequest) -> ChatResponse:
        """Replay the transcript with the new message as a fresh model request."""
        parts = build_chat_parts(
            request.history,
            request.message,
            request.imageBase64,
            request.context,
            self.settings.default_image_mime_type,
        )
        text = await self._complete(parts)

        mockup = extract_html_mockup(text)
        if mockup is not None:
            logger.info("Chat reply contains an HTML mockup (%d chars)", len(mockup))

        return ChatResponse(
            text=text,
            displayText=strip_html_mockup(text) if mockup is not None else text,
            mockupHtml=mockup,
        )

    async def continue_session(self, session: ChatSession, message: str) -> ChatResponse:
        """
        Run one chat turn against a caller-owned session.

        The user's message is appended before the call and the model reply
        after it. On failure an error reply is recorded in the transcript, so
        turns stay paired, and the error propagates.
        """
        session.add_user_message(message)
        try:
            response = await self.send_chat_message(
                ChatRequest(
                    history=session.prior_history(),
                    message=message,
                    imageBase64=session.lastImage,
                    context=session.lastContext,
                )
            )
        except DesignCriticError:
            session.add_model_reply(CHAT_ERROR_REPLY)
            raise
        session.add_model_reply(response.text)
        return response

    @staticmethod
    def start_session(request: AnalysisRequest) -> ChatSession:
        """Create an empty chat session bound to an analysed image and context."""
        return ChatSession(lastContext=request.context, lastImage=request.imageBase64)


def create_critic_service() -> DesignCriticService:
    """Factory function to create a configured critic service."""
    return DesignCriticService()
