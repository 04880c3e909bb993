"""
Encoding of list-valued fields at the persistence boundary.
"""

import json
from typing import Iterable, List, Optional

from core import MalformedMemoryDataError


def encode_list(values: Optional[Iterable[str]]) -> str:
    """Serialize a sequence of strings as a JSON array."""
    return json.dumps(list(values or []))


def decode_list(raw: Optional[str], field: str) -> List[str]:
    """
    Deserialize a JSON array of strings.

    Absent or empty values decode to an empty list. Anything else that is not
    a JSON array of strings raises MalformedMemoryDataError.
    """
    if raw is None or raw.strip() == "":
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedMemoryDataError(field, raw, f"invalid JSON ({e.msg})") from e
    if not isinstance(value, list):
        raise MalformedMemoryDataError(field, raw, f"expected a JSON array, got {type(value).__name__}")
    if not all(isinstance(item, str) for item in value):
        raise MalformedMemoryDataError(field, raw, "array items must be strings")
    return value
