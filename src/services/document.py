"""
Safe accessors for decoded JSON documents.

SES event payloads have no enforced schema, so every lookup returns None when
the key is missing or holds a value of another JSON type. Callers skip the
field instead of raising.
"""

from typing import Any, Dict, List, Optional


def get_mapping(document: Any, key: str) -> Optional[Dict[str, Any]]:
    """Return document[key] if document is a mapping and the value is a JSON object."""
    if not isinstance(document, dict):
        return None
    value = document.get(key)
    return value if isinstance(value, dict) else None


def get_sequence(document: Any, key: str) -> Optional[List[Any]]:
    """Return document[key] if document is a mapping and the value is a JSON array."""
    if not isinstance(document, dict):
        return None
    value = document.get(key)
    return value if isinstance(value, list) else None


def get_string(document: Any, key: str) -> Optional[str]:
    """Return document[key] if document is a mapping and the value is a JSON string."""
    if not isinstance(document, dict):
        return None
    value = document.get(key)
    return value if isinstance(value, str) else None


def iter_mappings(items: Optional[List[Any]]):
    """Yield the JSON objects in a sequence, skipping any other element type."""
    for item in items or []:
        if isinstance(item, dict):
            yield item
