"""
Builds HTTP requests for the Mautic API.
The URL is the configured base URL with the endpoint path appended verbatim.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import requests

from .errors import SerializationError

logger = logging.getLogger(__name__)


def encode_query(params: Optional[Mapping[str, Any]]) -> str:
    """Encode query parameters, dropping unset values and lowercasing booleans."""
    if not params:
        return ''

    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        pairs.append((key, value))

    return urlencode(pairs)


def encode_payload(payload: Any) -> bytes:
    try:
        return json.dumps(payload, separators=(',', ':'), allow_nan=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Payload is not JSON serializable: {e}") from e


def build_request(
    base_url: str,
    method: str,
    path: str,
    payload: Any = None,
    params: Optional[Mapping[str, Any]] = None,
) -> requests.Request:
    """Build an unsent request for `base_url + path`.

    A payload of None produces a request without a body.
    """
    url = f"{base_url}{path}"

    query = encode_query(params)
    if query:
        url = f"{url}?{query}"

    headers: Dict[str, str] = {}
    body = None
    if payload is not None:
        body = encode_payload(payload)
        headers['Content-Type'] = 'application/json'

    logger.debug(f"Built {method} {url} ({len(body) if body else 0} bytes)")
    return requests.Request(method=method, url=url, headers=headers, data=body)
