"""
Configuration for the Mautic API client.
Holds the base URL and Basic auth credentials used on every request.
"""

import os
import json
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigMissingError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = './config/secrets/mautic-config.json'


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for a Mautic instance."""
    base_url: str
    user: str = ''
    password: str = ''

    def __post_init__(self):
        if not self.base_url:
            raise ConfigMissingError("base_url must not be empty")

    def __repr__(self) -> str:
        # Keep the password out of logs and tracebacks
        return f"ClientConfig(base_url={self.base_url!r}, user={self.user!r}, password='***')"

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'ClientConfig':
        """Load configuration from the environment, falling back to a JSON secrets file.

        Environment variables win over the file:
        MAUTIC_BASE_URL, MAUTIC_USER, MAUTIC_PASSWORD
        """
        base_url = os.getenv('MAUTIC_BASE_URL')
        user = os.getenv('MAUTIC_USER')
        password = os.getenv('MAUTIC_PASSWORD')

        if not (base_url and user and password):
            file_config = _read_config_file(config_path or DEFAULT_CONFIG_PATH)
            base_url = base_url or file_config.get('base_url')
            user = user or file_config.get('user')
            password = password or file_config.get('password')

        if not base_url:
            raise ConfigMissingError("MAUTIC_BASE_URL not found in environment or config file")

        return cls(base_url=base_url, user=user or '', password=password or '')


def _read_config_file(path: str) -> dict:
    if not os.path.exists(path):
        return {}

    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigMissingError(f"Failed to read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigMissingError(f"Config file {path} must contain a JSON object")

    logger.info(f"Loaded Mautic settings from {path}")
    return data
