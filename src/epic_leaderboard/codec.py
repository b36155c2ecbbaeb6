"""
Wire encoding helpers.

- construct_params: percent-encoded ``key=value&...`` query strings and form bodies
- serialize_metadata / deserialize_metadata: string maps carried as a JSON object
  inside the single ``meta`` form field
- format_score: full-precision decimal text for scores
"""

import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

logger = logging.getLogger(__name__)


def url_encode(value: str) -> str:
    """Percent-encode everything except unreserved characters (A-Z a-z 0-9 - _ . ~)."""
    return quote(value, safe="")


def construct_params(params: Mapping[str, str]) -> str:
    """Build ``key1=value1&key2=value2`` with every key and value percent-encoded.

    Args:
        params: Parameters, emitted in iteration order

    Returns:
        Encoded parameter string (empty string for an empty mapping)
    """
    return "&".join(f"{url_encode(key)}={url_encode(value)}" for key, value in params.items())


def serialize_metadata(metadata: Mapping[str, str] | None) -> str:
    """Serialize a string map to a compact, flat JSON object."""
    if not metadata:
        return "{}"
    return json.dumps(
        {str(key): str(value) for key, value in metadata.items()},
        ensure_ascii=False,
        separators=(",", ":"),
    )


def json_value_to_text(value: Any) -> str:
    """Render a decoded JSON scalar as text.

    Strings pass through, numbers keep their shortest form (``10.0`` -> ``"10"``),
    booleans become ``"true"``/``"false"``. Anything else renders as ``""``.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return ""


def deserialize_metadata(raw: str | None) -> dict[str, str]:
    """Parse a JSON object string into a string map.

    Malformed input and non-object JSON yield an empty map; this never raises.
    """
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        logger.debug("Ignoring malformed metadata: %r", raw)
        return {}

    if not isinstance(parsed, dict):
        logger.debug("Ignoring non-object metadata: %r", raw)
        return {}

    return {str(key): json_value_to_text(value) for key, value in parsed.items()}


def format_score(score: float) -> str:
    """Format a score with 17 significant digits so a double round-trips exactly."""
    return "%.17g" % score
