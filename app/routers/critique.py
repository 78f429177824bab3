"""FastAPI router for design critique and redesign chat."""

from fastapi import APIRouter, HTTPException, Depends

from app.models.request_models import AnalysisRequest, ChatRequest
from app.models.response_models import AnalysisResponse, ChatResponse
from app.services.design_critic import (
    DesignCriticService,
    MissingCredentialError,
    ModelServiceError,
    create_critic_service,
)

router = APIRouter()


def get_critic_service() -> DesignCriticService:
    """Dependency injection for DesignCriticService."""
    return create_critic_service()


def _raise_for_critic_error(e: Exception, action: str):
    if isinstance(e, MissingCredentialError):
        raise HTTPException(status_code=500, detail=str(e)) from e
    if isinstance(e, ModelServiceError):
        raise HTTPException(status_code=502, detail=str(e)) from e
    raise HTTPException(status_code=500, detail=f"Failed to {action}: {str(e)}") from e


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_design(
    request: AnalysisRequest,
    critic: DesignCriticService = Depends(get_critic_service),
) -> AnalysisResponse:
    """
    Critique a design image or Figma link.

    Returns the markdown critique and, when the model produced a parsable
    score block, the overall score and the five dimension scores.
    """
    try:
        if not request.imageBase64 and not request.context.figmaUrl:
            raise HTTPException(
                status_code=400,
                detail="An image or a Figma URL is required for analysis",
            )

        return await critic.analyze_design(request)

    except HTTPException:
        raise
    except Exception as e:
        _raise_for_critic_error(e, "analyze design")


@router.post("/chat", response_model=ChatResponse)
async def chat_about_design(
    request: ChatRequest,
    critic: DesignCriticService = Depends(get_critic_service),
) -> ChatResponse:
    """
    Send a follow-up message about the analysed design.

    The caller sends the prior transcript, the original image and context with
    every message. HTML mockups in the reply are returned separately.
    """
    try:
        if not request.message.strip():
            raise HTTPException(status_code=400, detail="Message must not be empty")

        return await critic.send_chat_message(request)

    except HTTPException:
        raise
    except Exception as e:
        _raise_for_critic_error(e, "process chat")


@router.get("/health")
async def critique_health():
    """Health check endpoint for the critique router."""
    return {"status": "healthy", "service": "critique"}
