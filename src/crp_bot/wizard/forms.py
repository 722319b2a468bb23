"""Reading and normalizing submitted modal values."""

import re
from typing import Any

MIN_VARIATIONS = 1
MAX_VARIATIONS = 5

LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


def read_value(state_values: dict[str, Any], block_id: str, action_id: str) -> str | None:
    """Get a submitted value from `view.state.values`.

    Handles both plain text inputs (`value`) and selects (`selected_option`).
    Returns None for missing blocks and blank inputs.
    """
    block = state_values.get(block_id)
    if not isinstance(block, dict):
        return None
    element = block.get(action_id)
    if not isinstance(element, dict):
        return None

    value = element.get("value")
    if value:
        return str(value)

    selected = element.get("selected_option")
    if isinstance(selected, dict) and selected.get("value"):
        return str(selected["value"])
    return None


def parse_leading_int(raw: str | None) -> int | None:
    """Parse the integer prefix of a string ("3 variations" -> 3), None if absent."""
    if raw is None:
        return None
    match = LEADING_INT_PATTERN.match(raw)
    if match is None:
        return None
    return int(match.group(1))


def parse_variation_count(raw: str | None) -> int:
    """Number of variations to create, clamped to [1, 5].

    Non-numeric input and zero fall back to 1 rather than being rejected.
    """
    parsed = parse_leading_int(raw)
    if not parsed:
        parsed = MIN_VARIATIONS
    return max(MIN_VARIATIONS, min(MAX_VARIATIONS, parsed))


def parse_variation_index(raw: str | None) -> int:
    """Variation number to update; 1 when unparsable.

    Zero and negative numbers are returned as-is so the caller can reject them.
    """
    parsed = parse_leading_int(raw)
    if parsed is None:
        return 1
    return parsed
