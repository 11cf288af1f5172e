from typing import Any, Optional
from flask import current_app
from content_tree.domain.answers import dump_answers


def serialized_payload(value: Any) -> Optional[str]:
    """Accept a dict (serialized here) or an already-serialized JSON string."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return dump_answers(value)
    raise ValueError(f"Expected an object or JSON string, got {type(value).__name__}")


def strict_layout_specs(strict: Optional[bool]) -> bool:
    if strict is not None:
        return strict
    return bool(current_app.config.get("STRICT_LAYOUT_SPECS", False))
