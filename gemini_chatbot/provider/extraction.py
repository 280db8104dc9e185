"""Text extraction from Gemini responses.

The response shape differs between SDK versions and between the SDK object
and its raw JSON form, so extraction walks an ordered list of known paths and
returns the first value present. When none matches, the whole response is
serialized instead, which makes ``extract_text`` a total function.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_MISSING = object()

# Tried in order, first non-None value wins
EXTRACTION_PATHS: tuple[tuple[str | int, ...], ...] = (
    ("response", "candidates", 0, "content", "parts", 0, "text"),
    ("candidates", 0, "content", "parts", 0, "text"),
    ("response", "candidates", 0, "content", "text"),
)


def _step(node: Any, key: str | int) -> Any:
    if node is None:
        return _MISSING
    if isinstance(key, int):
        if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
            return node[key] if -len(node) <= key < len(node) else _MISSING
        return _MISSING
    if isinstance(node, Mapping):
        return node.get(key, _MISSING)
    return getattr(node, key, _MISSING)


def lookup(node: Any, path: Sequence[str | int]) -> Any:
    """Follow ``path`` through attributes, mapping keys and list indexes.

    Returns:
        The value at the end of the path, or None when any step is missing.
    """
    for key in path:
        node = _step(node, key)
        if node is _MISSING:
            return None
    return node


def serialize_response(response: Any) -> str:
    """Render a whole response as indented JSON, falling back to ``repr``."""
    try:
        if isinstance(response, BaseModel):
            payload = response.model_dump(mode="json", exclude_none=True)
        else:
            payload = response
        return json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not serialize response as JSON: {e}")
        return repr(response)


def extract_text(response: Any) -> str:
    """Extract the generated text from a provider response.

    Args:
        response: A ``GenerateContentResponse``, a wrapper exposing it as
            ``response``, or the equivalent plain mapping.

    Returns:
        The first text found along ``EXTRACTION_PATHS``, or the serialized
        response when no path yields a value.
    """
    try:
        for path in EXTRACTION_PATHS:
            value = lookup(response, path)
            if value is not None:
                return value if isinstance(value, str) else str(value)
    except Exception as e:
        logger.error(f"Error extracting text: {e}")
        return serialize_response(response)

    logger.info("No text field in response, returning serialized response")
    return serialize_response(response)
