"""
Tests for splitting model output into scores and critique text.

Tests cover:
1. Separator-delimited score blocks
2. Fallback to the first JSON object
3. Graceful degradation on unparsable scores
4. HTML mockup extraction from chat replies
"""

import json

from app.utils.response_parser import (
    extract_html_mockup,
    split_response,
    strip_html_mockup,
)

SCORES = {
    "overallScore": 59,
    "confidence": "High",
    "metrics": {
        "infoArchitecture": 6,
        "visualHierarchy": 5,
        "layoutSpacing": 7,
        "accessibility": 4,
        "usability": 6,
    },
}
SCORES_JSON = json.dumps(SCORES, indent=2)


class TestSeparatorSplit:
    """Score block before the separator, markdown after it."""

    def test_scores_and_body(self):
        text = SCORES_JSON + "---SEPARATOR---# Summary\nBody"

        parsed = split_response(text)

        assert parsed.text == "# Summary\nBody"
        assert parsed.scores is not None
        assert parsed.scores.overallScore == 59
        assert parsed.scores.metrics.accessibility == 4

    def test_body_is_trimmed(self):
        text = SCORES_JSON + "\n---SEPARATOR---\n\n# Executive Summary\nLooks good.\n\n"

        parsed = split_response(text)

        assert parsed.text == "# Executive Summary\nLooks good."
        assert parsed.scores.confidence == "High"

    def test_code_fenced_score_block(self):
        text = "```json\n" + SCORES_JSON + "\n```\n---SEPARATOR---\n# Summary"

        parsed = split_response(text)

        assert parsed.scores is not None
        assert parsed.scores.metrics.layoutSpacing == 7
        assert parsed.text == "# Summary"

    def test_unparsable_block_returns_original_text(self):
        text = "{not json at all---SEPARATOR---# Summary\nBody"

        parsed = split_response(text)

        assert parsed.scores is None
        assert parsed.text == text

    def test_out_of_range_scores_pass_through(self):
        odd = dict(SCORES, overallScore=250)
        text = json.dumps(odd) + "---SEPARATOR---# Summary"

        parsed = split_response(text)

        assert parsed.scores.overallScore == 250
        assert parsed.text == "# Summary"

    def test_fractional_metric_passes_through(self):
        odd = dict(SCORES, metrics=dict(SCORES["metrics"], layoutSpacing=7.5))
        text = json.dumps(odd) + "---SEPARATOR---# Summary\nBody"

        parsed = split_response(text)

        assert parsed.scores.metrics.layoutSpacing == 7.5
        assert parsed.text == "# Summary\nBody"

    def test_lowercase_confidence_passes_through(self):
        odd = dict(SCORES, confidence="high")
        text = json.dumps(odd) + "---SEPARATOR---# Summary"

        parsed = split_response(text)

        assert parsed.scores.confidence == "High"
        assert parsed.text == "# Summary"

    def test_missing_metrics_is_unparsable(self):
        partial = {"overallScore": 59, "confidence": "High"}
        text = json.dumps(partial) + "---SEPARATOR---# Summary"

        parsed = split_response(text)

        assert parsed.scores is None
        assert parsed.text == text

    def test_inconsistent_scores_pass_through(self):
        odd = dict(SCORES, overallScore=100)
        text = json.dumps(odd) + "---SEPARATOR---# Summary"

        parsed = split_response(text)

        assert parsed.scores.overallScore == 100
        assert parsed.scores.metrics.accessibility == 4


class TestJsonFallback:
    """No separator: the first JSON object is the score block."""

    def test_embedded_object_is_extracted(self):
        text = "Here are the scores:\n" + SCORES_JSON + "\n# Summary\nBody"

        parsed = split_response(text)

        assert parsed.scores is not None
        assert parsed.scores.model_dump(mode="json") == SCORES
        assert SCORES_JSON not in parsed.text
        assert "overallScore" not in parsed.text
        assert parsed.text.startswith("Here are the scores:")
        assert parsed.text.endswith("# Summary\nBody")

    def test_fenced_object_without_separator(self):
        text = "```json\n" + SCORES_JSON + "\n```\n# Summary\nBody"

        parsed = split_response(text)

        assert parsed.scores.overallScore == 59
        assert parsed.text == "# Summary\nBody"

    def test_untagged_fence_without_separator(self):
        text = "Scores:\n```\n" + SCORES_JSON + "\n```\n\n# Summary"

        parsed = split_response(text)

        assert parsed.scores is not None
        assert "```" not in parsed.text
        assert parsed.text.startswith("Scores:")
        assert parsed.text.endswith("# Summary")

    def test_unrelated_fence_is_kept(self):
        text = SCORES_JSON + "\n# Summary\n```css\n.btn { color: red; }\n```"

        parsed = split_response(text)

        assert parsed.scores is not None
        assert parsed.text.startswith("# Summary")
        assert "```css" in parsed.text

    def test_no_json_returns_text_unchanged(self):
        text = "# Summary\nNo scores this time."

        parsed = split_response(text)

        assert parsed.scores is None
        assert parsed.text == text

    def test_non_score_object_returns_original_text(self):
        text = 'Config: {"color": "blue"}\n# Summary'

        parsed = split_response(text)

        assert parsed.scores is None
        assert parsed.text == text

    def test_empty_text(self):
        parsed = split_response("")

        assert parsed.scores is None
        assert parsed.text == ""


class TestHtmlMockup:
    """First ```html block in a chat reply is the redesign mockup."""

    def test_extracts_block_verbatim(self):
        reply = "Here is the redesign:\n```html\n<div>Hi</div>\n```\nEnjoy!"

        assert extract_html_mockup(reply) == "<div>Hi</div>"

    def test_strip_removes_fence_from_display_text(self):
        reply = "Here is the redesign:\n```html\n<div>Hi</div>\n```\nEnjoy!"

        display = strip_html_mockup(reply)

        assert "```" not in display
        assert "<div>Hi</div>" not in display
        assert display.startswith("Here is the redesign:")
        assert display.endswith("Enjoy!")

    def test_only_first_block_is_surfaced(self):
        reply = (
            "```html\n<main>One</main>\n```\n"
            "and an alternative\n"
            "```html\n<main>Two</main>\n```"
        )

        assert extract_html_mockup(reply) == "<main>One</main>"
        assert "<main>Two</main>" in strip_html_mockup(reply)

    def test_multiline_document(self):
        page = "<!DOCTYPE html>\n<html>\n<body class=\"p-4\">Hi</body>\n</html>"
        reply = f"```html\n{page}\n```"

        assert extract_html_mockup(reply) == page

    def test_no_html_block(self):
        reply = "Try increasing the button contrast.\n```css\n.btn { color: red; }\n```"

        assert extract_html_mockup(reply) is None
