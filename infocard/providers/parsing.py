"""Turn free-form model text into a validated ``CardPayload``.

The reply is scanned for the first ``{`` that starts a complete JSON object;
any text before it or after the object's closing brace is ignored. Every
failure surfaces as ``ResponseFormatError`` so a different scanner can be
dropped in here without touching callers.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from infocard.exceptions import ResponseFormatError
from infocard.models import CardPayload

logger = logging.getLogger(__name__)

STRING_FIELDS = ("title", "description")
LIST_FIELDS = ("keyPoints", "tags")

_decoder = json.JSONDecoder()


def find_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Return the first decodable JSON object embedded in ``text``."""
    start = text.find("{")
    while start != -1:
        try:
            obj, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            obj = None
        if isinstance(obj, dict):
            return obj
        start = text.find("{", start + 1)
    return None


def _fail(reason: str, raw_text: str) -> ResponseFormatError:
    logger.error(f"Unusable model reply ({reason}): {raw_text[:1000]}")
    return ResponseFormatError(reason, raw_text=raw_text)


def parse_card_reply(raw_text: str) -> CardPayload:
    """Parse and validate a model reply; never returns a partially filled card."""
    parsed = find_json_object(raw_text or "")
    if parsed is None:
        raise _fail("no JSON object found in reply", raw_text or "")

    for name in STRING_FIELDS:
        value = parsed.get(name)
        if not isinstance(value, str) or not value.strip():
            raise _fail(f"field '{name}' must be a non-empty string", raw_text)

    for name in LIST_FIELDS:
        value = parsed.get(name)
        if not isinstance(value, list):
            raise _fail(f"field '{name}' must be an array", raw_text)
        if not all(isinstance(item, str) for item in value):
            raise _fail(f"field '{name}' must contain only strings", raw_text)

    metadata = parsed.get("metadata")
    return CardPayload(
        title=parsed["title"],
        description=parsed["description"],
        key_points=list(parsed["keyPoints"]),
        tags=list(parsed["tags"]),
        metadata=metadata if isinstance(metadata, dict) else {},
    )
