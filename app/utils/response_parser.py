"""Parsing of free-text model output into structured critique data."""

import json
import logging
import re
from typing import Any, Dict, NamedTuple, Optional, Tuple

from pydantic import ValidationError

from app.models.design_models import ScoreReport
from app.utils.prompts import SCORE_SEPARATOR

logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"```(?:json)?")
_HTML_BLOCK_RE = re.compile(r"```html\n(.*?)\n```", re.DOTALL)
_FENCE_OPEN_RE = re.compile(r"```(?:json)?\s*$")
_FENCE_CLOSE_RE = re.compile(r"\s*```")

_decoder = json.JSONDecoder()


class ParsedCritique(NamedTuple):
    """Markdown body of a critique and its score report, if one was found."""
    text: str
    scores: Optional[ScoreReport]


def _strip_code_fences(block: str) -> str:
    return _CODE_FENCE_RE.sub("", block).strip()


def _find_json_object(text: str) -> Optional[Tuple[int, int, Dict[str, Any]]]:
    """Locate the first brace-delimited JSON object in text as (start, end, value)."""
    start = text.find("{")
    while start != -1:
        try:
            value, end = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(value, dict):
            return start, end, value
        start = text.find("{", end)
    return None


def _widen_over_fence(text: str, start: int, end: int) -> Tuple[int, int]:
    """Extend (start, end) over a code fence wrapped directly around it."""
    opening = _FENCE_OPEN_RE.search(text, 0, start)
    closing = _FENCE_CLOSE_RE.match(text, end)
    if opening and closing:
        return opening.start(), closing.end()
    return start, end


def split_response(full_text: str) -> ParsedCritique:
    """
    Split model output into its markdown body and score report.

    The score block is whatever precedes the separator token or, without a
    separator, the first JSON object in the text. When the block cannot be
    parsed (malformed JSON or a missing field) the whole original text is
    returned as the body and scores is None. Score values themselves are
    never range-checked.
    """
    full_text = full_text or ""

    try:
        separator_index = full_text.find(SCORE_SEPARATOR)
        if separator_index != -1:
            json_str = full_text[:separator_index].strip()
            markdown_text = full_text[separator_index + len(SCORE_SEPARATOR):].strip()
            raw_scores = json.loads(_strip_code_fences(json_str))
        else:
            found = _find_json_object(full_text)
            if found is None:
                return ParsedCritique(text=full_text, scores=None)
            start, end, raw_scores = found
            start, end = _widen_over_fence(full_text, start, end)
            markdown_text = (full_text[:start] + full_text[end:]).strip()

        scores = ScoreReport.model_validate(raw_scores)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("Failed to parse design scores: %s", e)
        return ParsedCritique(text=full_text, scores=None)

    return ParsedCritique(text=markdown_text, scores=scores)


def extract_html_mockup(text: str) -> Optional[str]:
    """Return the content of the first ```html fenced block, verbatim."""
    match = _HTML_BLOCK_RE.search(text or "")
    return match.group(1) if match else None


def strip_html_mockup(text: str) -> str:
    """Remove the first ```html fenced block so the reply can be shown as prose."""
    return _HTML_BLOCK_RE.sub("", text or "", count=1).strip()
