"""JSON parsing utilities for LLM responses."""

import json
import logging

logger = logging.getLogger(__name__)


def extract_json_span(content: str) -> str | None:
    """Return the text from the first '{' to the last '}', or None without braces.

    The model often wraps its answer in prose or markdown fences; only the
    outermost brace span is worth parsing.
    """
    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return content[start:end + 1]


def parse_json_span(span: str) -> dict | None:
    """Decode a span returned by ``extract_json_span``.

    Returns None when the span isn't valid JSON or decodes to something
    other than an object.
    """
    try:
        data = json.loads(span)
    except ValueError as e:
        logger.debug("Failed to parse JSON from content", extra={
            "error": str(e),
            "content_preview": span[:200]
        })
        return None

    return data if isinstance(data, dict) else None
