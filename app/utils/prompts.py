"""Utility functions to generate prompts for design critique and redesign chat."""

from typing import Any, Dict, List, Optional

from app.models.design_models import ChatMessage, ChatRole, DesignContext
from app.utils.images import build_image_part

SCORE_SEPARATOR = "---SEPARATOR---"

SYSTEM_INSTRUCTION = f"""
You are a world-class Senior Product Design Architect and UX Engineer. Your job is to critique and improve product designs based on an image and context provided.

First, you must evaluate the design on 5 specific dimensions (0-10 scale) and calculate an overall score (0-100).
The dimensions are:
1. Information Architecture (Clarity of structure, grouping)
2. Visual Hierarchy (Scanning path, emphasis)
3. Layout & Spacing (Whitespace, alignment, grid)
4. Accessibility (Contrast, touch targets, text size)
5. Usability (Affordances, standard patterns)

**CRITICAL OUTPUT FORMAT:**
You must start your response with a valid JSON block strictly following this format, followed by your markdown critique. Do not wrap the JSON in markdown code blocks like ```json. Just output the raw JSON string first, then a divider, then the markdown.

{{
  "overallScore": 59,
  "confidence": "High",
  "metrics": {{
    "infoArchitecture": 6,
    "visualHierarchy": 5,
    "layoutSpacing": 7,
    "accessibility": 4,
    "usability": 6
  }}
}}
{SCORE_SEPARATOR}
# Executive Summary
[Brief high-level summary of the design's effectiveness]

# 360° Perspective Analysis

## 👤 User Experience (The Human View)
[Critique how a new or power user would experience this. Focus on cognitive load, friction points, emotional response, and "Can I figure this out in 3 seconds?"]

## 💼 Business Strategy (The ROI View)
[Critique how this design impacts conversion, brand trust, and business goals. Are call-to-actions clear? Does it drive the intended user behavior? Identify missed revenue opportunities.]

## 🛠️ Engineering & Feasibility (The Dev View)
[Critique implementation complexity. Are there non-standard patterns that increase technical debt? Accessibility risks (WCAG)? Performance implications of the layout?]

# Actionable Improvements
[Bulleted list of specific, high-impact changes]

... [Rest of Markdown Critique] ...

---

**INTERACTIVE REDESIGN MODE (Context for follow-up chat):**
If the user asks to "visualize", "show me", "code this", "apply changes", or "edit" the design in the chat follow-up:
1. You MUST generate a single, self-contained HTML file.
2. Use Tailwind CSS via CDN script: <script src="https://cdn.tailwindcss.com"></script>
3. Use Google Fonts (Inter) to make it look professional.
4. Use Lucide Icons (via script or SVG) if icons are needed.
5. Wrap the code specifically in a markdown code block tagged as html: ```html ... ```
6. Do not just give snippets. Give the FULL functional component/page that represents the improved design.
"""

INFER_CONTEXT_NOTE = (
    "(Note: No specific business or user context was provided. Please infer the "
    "likely context based on standard UI patterns for this type of interface.)"
)

HISTORY_START = "--- PREVIOUS CONVERSATION HISTORY ---"
HISTORY_END = "--- END HISTORY ---"


def get_system_message() -> str:
    """Get the fixed critique rubric sent with every model request."""
    return SYSTEM_INSTRUCTION.strip()


def text_part(text: str) -> Dict[str, Any]:
    return {"type": "text", "text": text}


def get_analysis_prompt(context: DesignContext, theme_mode: str = "day") -> str:
    """Generate the critique prompt text for the given context and UI theme."""
    prompt = "Please critique the attached design.\n\n"

    prompt += f"**Current UI Theme:** {theme_mode}\n"
    prompt += (
        'If theme is "night", assume a dark background and adjust any design feedback '
        "(e.g. colour contrast, brightness) for dark mode. If theme is \"day\", assume a "
        "light background and adjust feedback for light mode.\n\n"
    )

    if context.figmaUrl:
        prompt += f"**Figma URL provided:** {context.figmaUrl}\n"

    if context.has_user_context:
        prompt += f"**Context, Goals & Constraints:**\n{context.userContext}\n"
    else:
        prompt += f"\n{INFER_CONTEXT_NOTE}"

    return prompt


def build_analysis_parts(
    image_base64: Optional[str],
    context: DesignContext,
    theme_mode: str = "day",
    default_mime_type: str = "image/png",
) -> List[Dict[str, Any]]:
    """Build the ordered content parts for an analysis request: image first, then text."""
    parts = []

    image_part = build_image_part(image_base64, default_mime_type)
    if image_part:
        parts.append(image_part)

    parts.append(text_part(get_analysis_prompt(context, theme_mode)))
    return parts


def render_history(history: List[ChatMessage], message: str) -> str:
    """
    Render the transcript and the new request as plain text.

    Turns keep their insertion order and are labelled "User"/"Model" so the
    model can tell them apart.
    """
    lines = [HISTORY_START]
    for msg in history:
        label = "User" if msg.role == ChatRole.USER else "Model"
        lines.append(f"{label}: {msg.text}")
    lines.append(HISTORY_END)

    return "\n".join(lines) + f"\n\nUser's New Request: {message}"


def build_chat_parts(
    history: List[ChatMessage],
    message: str,
    image_base64: Optional[str],
    context: DesignContext,
    default_mime_type: str = "image/png",
) -> List[Dict[str, Any]]:
    """
    Build a fresh, self-contained request for one chat turn.

    No model-side session is kept, so the original image, the design context
    and the whole transcript are sent again on every turn.
    """
    parts = []

    image_part = build_image_part(image_base64, default_mime_type)
    if image_part:
        parts.append(image_part)

    context_str = f"(Context: {context.userContext or 'None'})"
    parts.append(text_part(f"Original Design Context: {context_str}\n\n"))

    parts.append(text_part(render_history(history, message)))
    return parts
