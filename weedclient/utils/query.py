from enum import Enum
from typing import Any, Iterable, Tuple

import httpx


def encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def encode_query(pairs: Iterable[Tuple[str, Any]]) -> httpx.QueryParams:
    """Build query params from (name, value) pairs, dropping every None value."""
    return httpx.QueryParams(
        [(name, encode_value(value)) for name, value in pairs if value is not None]
    )
