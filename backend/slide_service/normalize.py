"""
Slide normalization helpers.
Turns whatever the model returned into a bounded {title, bullets, notes} object.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

# --- CONSTANTS FOR NORMALIZATION ---
DEFAULT_TITLE = "Untitled"
MAX_BULLETS = 8
TITLE_MAX_LENGTH = 80  # Requested in the prompt only, not enforced here


@dataclass
class SlideSpec:
    """
    A normalized slide outline, as returned to the caller.

    Attributes:
        title (str): Slide title, "Untitled" when the model gave none.
        bullets (list): At most MAX_BULLETS bullet points.
        notes (str): Speaker notes, possibly empty.
    """
    title: str = DEFAULT_TITLE
    bullets: List[Any] = field(default_factory=list)
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """
        Returns:
            dict: {title, bullets, notes}, ready for jsonify.
        """
        return {"title": self.title, "bullets": self.bullets, "notes": self.notes}


def _loads(raw: Any) -> Any:
    try:
        return json.loads(raw)
    except (ValueError, TypeError, RecursionError):
        # RecursionError: nesting too deep for the decoder
        return None


def parse_json_object(raw: Any) -> Dict[str, Any]:
    """
    Safely decode a JSON object.

    A JSON string whose value is itself encoded JSON is unwrapped once.

    Args:
        raw: A JSON string, or an already decoded value.

    Returns:
        dict: The decoded object, or {} if it is not valid JSON or not an object.
    """
    if isinstance(raw, (str, bytes, bytearray)):
        raw = _loads(raw)
        if isinstance(raw, str):
            raw = _loads(raw)

    return raw if isinstance(raw, dict) else {}


def normalize_slide(payload: Dict[str, Any]) -> SlideSpec:
    """
    Apply defaults and the bullet cap to a decoded model reply.

    - title: falls back to "Untitled" when missing or empty.
    - bullets: only a list is accepted; anything else becomes []. Capped at 8.
    - notes: falls back to "" when missing or empty.
    """
    bullets = payload.get("bullets")

    return SlideSpec(
        title=payload.get("title") or DEFAULT_TITLE,
        bullets=bullets[:MAX_BULLETS] if isinstance(bullets, list) else [],
        notes=payload.get("notes") or "",
    )
