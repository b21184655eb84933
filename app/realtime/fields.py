import math
import time
from typing import Any, Dict


def now_ms() -> int:
    return int(time.time() * 1000)


def is_finite_number(value: Any) -> bool:
    # bool is an int subclass; a stray True must not become a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def put_number(payload: Dict[str, Any], key: str, value: Any) -> None:
    if is_finite_number(value):
        payload[key] = value


def put_text(payload: Dict[str, Any], key: str, value: Any) -> None:
    if isinstance(value, str) and value:
        payload[key] = value


# characters the realtime database refuses in a key, plus the path separator
_FORBIDDEN_KEY_CHARS = frozenset("/.#$[]")


def is_valid_key(value: Any) -> bool:
    """True when `value` can be used as one path segment of the store."""
    if not isinstance(value, str) or not value:
        return False
    return not any(ch in _FORBIDDEN_KEY_CHARS or ord(ch) < 32 or ord(ch) == 127 for ch in value)
