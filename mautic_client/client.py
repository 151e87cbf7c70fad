"""
Mautic API client.
Attaches Basic auth to every request, executes it over a shared requests
session and decodes the response. No retries: each call is one round trip.
"""

import enum
import json
import logging
from typing import Any, List, Mapping, Optional

import requests
from requests.auth import HTTPBasicAuth

from .config import ClientConfig
from .errors import ApiError, ConfigMissingError, DecodeError, TransportError
from .request_builder import build_request

logger = logging.getLogger(__name__)

ACCEPT_HEADER = 'application/json; charset=utf-8'


class Decode(enum.Enum):
    """How a response body is turned into a value."""
    JSON = 'json'
    TEXT = 'text'


def decode_response(response: requests.Response, decode: Decode = Decode.JSON) -> Any:
    """Decode a response body.

    TEXT returns the body verbatim. JSON returns the parsed document, or None
    when the body is empty.
    """
    if decode is Decode.TEXT:
        return response.text

    content = response.content
    if not content or not content.strip():
        return None

    try:
        return json.loads(content)
    except ValueError as e:
        raise DecodeError(f"Response is not valid JSON: {e}") from e


def _error_messages(response: requests.Response) -> List[str]:
    """Pull messages out of Mautic's {"errors": [{"message": ...}]} error body."""
    try:
        body = json.loads(response.content or b'null')
    except ValueError:
        return []

    if not isinstance(body, dict):
        return []

    errors = body.get('errors') or []
    if isinstance(errors, dict):
        errors = list(errors.values())

    messages = []
    for error in errors:
        if isinstance(error, dict) and error.get('message'):
            messages.append(str(error['message']))
        elif isinstance(error, str):
            messages.append(error)
    return messages


class Client:
    """Authenticated client for a single Mautic instance."""

    def __init__(self, config: Optional[ClientConfig], session: Optional[requests.Session] = None):
        if config is None:
            raise ConfigMissingError("Client requires a ClientConfig")

        self.config = config
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_env(cls, config_path: Optional[str] = None) -> 'Client':
        return cls(ClientConfig.load(config_path))

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def build_request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> requests.Request:
        return build_request(self.config.base_url, method, path, payload=payload, params=params)

    def send_request(
        self,
        request: requests.Request,
        decode: Decode = Decode.JSON,
        timeout: Optional[float] = None,
    ) -> Any:
        """Execute a built request and return the decoded body.

        `timeout` is handed to the transport unchanged; None waits indefinitely.
        """
        request.headers['Accept'] = ACCEPT_HEADER
        request.auth = HTTPBasicAuth(self.config.user, self.config.password)

        prepared = self.session.prepare_request(request)
        logger.debug(f"{prepared.method} {prepared.url}")

        # Proxies, CA bundle and cert from the environment, as requests.get would apply them
        settings = self.session.merge_environment_settings(prepared.url, {}, None, None, None)

        try:
            response = self.session.send(prepared, timeout=timeout, **settings)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request failed: {prepared.method} {prepared.url}: {e}")
            raise TransportError(f"{prepared.method} {prepared.url} failed: {e}") from e

        try:
            if response.status_code >= 400:
                body = response.text or ''
                logger.error(f"API call failed: {prepared.method} {prepared.url} "
                             f"(status={response.status_code}, body={body[:800]})")
                raise ApiError(response.status_code, body, _error_messages(response))

            return decode_response(response, decode)
        finally:
            response.close()
