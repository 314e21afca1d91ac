"""
Response formatter: turns BSON documents into printable JSON text.
"""

import json
from typing import Any

INDENT = 2


def to_printable(obj: Any) -> Any:
    """Recursively convert non-JSON-safe types to safe representations."""
    if isinstance(obj, dict):
        return {k: to_printable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_printable(item) for item in obj]
    if isinstance(obj, bytes):
        try:
            return obj.decode("utf-8")
        except UnicodeDecodeError:
            return f"[binary {len(obj)} bytes]"
    if isinstance(obj, (int, float, str, bool, type(None))):
        return obj
    # datetime, ObjectId, Decimal128, etc.
    return str(obj)


def format_result(result: Any) -> str:
    """Render a query result (documents, counts, explain output) as JSON."""
    return json.dumps(to_printable(result), indent=INDENT)
