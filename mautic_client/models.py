"""
Shared data structures and decoding helpers for Mautic resources.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from .errors import DecodeError


@dataclass
class ListParams:
    """Filtering and paging options accepted by list endpoints.

    Unset values are left out of the query string.
    """
    search: Optional[str] = None
    start: Optional[int] = None
    limit: Optional[int] = None
    order_by: Optional[str] = None
    order_by_dir: Optional[str] = None
    published_only: Optional[bool] = None
    minimal: Optional[bool] = None

    def to_query(self) -> Dict[str, Any]:
        return {
            'search': self.search,
            'start': self.start,
            'limit': self.limit,
            'orderBy': self.order_by,
            'orderByDir': self.order_by_dir,
            'publishedOnly': self.published_only,
            'minimal': self.minimal,
        }


def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as returned by the API."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value

    text = str(value)
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'

    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise DecodeError(f"Invalid timestamp {value!r}") from e


def require_object(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"Expected a JSON object for {what}, got {type(value).__name__}")
    return value


def unwrap(document: Any, key: str) -> Dict[str, Any]:
    """Return the entity nested under `key` in a wrapper response."""
    body = require_object(document, 'response')
    if key not in body:
        raise DecodeError(f"Response has no '{key}' entry")
    return require_object(body[key], key)


def flatten_entities(collection: Any, key: str) -> List[Dict[str, Any]]:
    """Flatten an id -> entity mapping into a list.

    The API keys entities by id with no defined ordering, so the result order
    is unspecified. A list-shaped collection is passed through.
    """
    if collection is None:
        return []
    if isinstance(collection, dict):
        items = list(collection.values())
    elif isinstance(collection, list):
        items = collection
    else:
        raise DecodeError(f"Expected a collection for '{key}', got {type(collection).__name__}")

    return [require_object(item, key) for item in items]


def unwrap_list(document: Any, key: str) -> List[Dict[str, Any]]:
    body = require_object(document, 'response')
    return flatten_entities(body.get(key), key)
