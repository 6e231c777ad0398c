"""Scan result serialization: JSON-compatible export.

Converts span records to plain dicts for handing scan results to an editor
process over a pipe or socket. Every record dict carries a ``_type``
discriminator; output is deterministic (sorted keys).

Example:
    from qmdspan import scan
    from qmdspan.serialization import to_json

    payload = to_json(scan("# Hello"))

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from qmdspan.spans import ScanResult, TextSpan


def to_dict(record: Any) -> dict[str, Any]:
    """Convert a span record (or a whole ScanResult) to a dict.

    Args:
        record: Any qmdspan span dataclass.

    Returns:
        Dict with ``_type`` and all record fields.

    Raises:
        TypeError: If ``record`` is not a dataclass instance.

    """
    if not is_dataclass(record) or isinstance(record, type):
        msg = f"Expected a span record, got {type(record).__name__}"
        raise TypeError(msg)

    if isinstance(record, TextSpan):
        return {"_type": "TextSpan", "start": record.start, "end": record.end}

    result: dict[str, Any] = {"_type": type(record).__name__}
    for f in fields(record):
        result[f.name] = _serialize_value(getattr(record, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def to_json(result: ScanResult, *, indent: int | None = None) -> str:
    """Serialize a ScanResult to a JSON string."""
    return json.dumps(to_dict(result), indent=indent, sort_keys=True)


__all__ = ["to_dict", "to_json"]
