"""
Helpers shared by the step resolver and the code generator for turning raw
model text into JSON, plus the URL clean-up applied to predicted URLs.
"""
import json
import re
from typing import Any, Optional

from constant.const_config import BLANK_PAGE_URL
from llm_service.errors import ResponseParseError

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", flags=re.I)
_FENCE_CLOSE = re.compile(r"\s*```$")
_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*://", flags=re.I)
_OPAQUE_SCHEMES = ("about:", "data:", "mailto:", "javascript:", "file:")


def clean_json(text: Optional[str]) -> str:
    """Strip markdown code fences. Empty or missing text becomes an empty JSON object."""
    if not text or not text.strip():
        return "{}"
    clean = text.strip()
    clean = _FENCE_OPEN.sub("", clean)
    clean = _FENCE_CLOSE.sub("", clean)
    return clean.strip() or "{}"


def parse_json_response(text: Optional[str]) -> Any:
    cleaned = clean_json(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Failed to parse AI JSON response: {e.msg} (line {e.lineno}, col {e.colno})") from e


def has_scheme(url: str) -> bool:
    return bool(_SCHEME.match(url)) or url.lower().startswith(_OPAQUE_SCHEMES)


def normalize_url(url: Optional[str]) -> Optional[str]:
    """Prefix https:// on scheme-less, dotted URLs. Applying it twice is the same as once."""
    if not url:
        return url
    url = url.strip()
    if url != BLANK_PAGE_URL and not has_scheme(url) and "." in url:
        return f"https://{url}"
    return url
