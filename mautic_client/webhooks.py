"""
Webhook endpoints of the Mautic API.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .client import Client
from .errors import InvalidIDError
from .models import ListParams, parse_datetime, require_object, unwrap, unwrap_list

logger = logging.getLogger(__name__)

HOOKS_PATH = '/hooks'


@dataclass
class Category:
    id: Optional[int] = None
    title: Optional[str] = None
    alias: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    bundle: Optional[str] = None
    created_by_user: Optional[str] = None
    modified_by_user: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Category':
        return cls(
            id=data.get('id'),
            title=data.get('title'),
            alias=data.get('alias'),
            description=data.get('description'),
            color=data.get('color'),
            bundle=data.get('bundle'),
            created_by_user=data.get('createdByUser'),
            modified_by_user=data.get('modifiedByUser'),
        )


@dataclass
class Webhook:
    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    webhook_url: Optional[str] = None
    secret: Optional[str] = None
    events_orderby_dir: Optional[str] = None
    is_published: bool = False
    date_added: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    created_by: Optional[int] = None
    created_by_user: Optional[str] = None
    modified_by: Optional[int] = None
    modified_by_user: Optional[str] = None
    category: Optional[Category] = None
    triggers: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Webhook':
        category = data.get('category')
        return cls(
            id=data.get('id'),
            name=data.get('name'),
            description=data.get('description'),
            webhook_url=data.get('webhookUrl'),
            secret=data.get('secret'),
            events_orderby_dir=data.get('eventsOrderbyDir'),
            is_published=bool(data.get('isPublished')),
            date_added=parse_datetime(data.get('dateAdded')),
            date_modified=parse_datetime(data.get('dateModified')),
            created_by=data.get('createdBy'),
            created_by_user=data.get('createdByUser'),
            modified_by=data.get('modifiedBy'),
            modified_by_user=data.get('modifiedByUser'),
            category=Category.from_dict(category) if isinstance(category, dict) else None,
            triggers=list(data.get('triggers') or []),
        )


@dataclass
class WebhookTrigger:
    """An event a webhook can subscribe to, e.g. mautic.lead_post_save_new."""
    name: str
    label: Optional[str] = None
    description: Optional[str] = None


@dataclass
class WebhookParams:
    name: str = ''
    description: str = ''
    webhook_url: str = ''
    secret: Optional[str] = None
    events_orderby_dir: str = ''
    triggers: List[str] = field(default_factory=list)
    id: Optional[int] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.id is not None:
            payload['id'] = self.id
        payload.update({
            'name': self.name,
            'description': self.description,
            'webhookUrl': self.webhook_url,
            'secret': self.secret,
            'eventsOrderbyDir': self.events_orderby_dir,
            'triggers': list(self.triggers),
        })
        return payload


def get_webhook(client: Client, webhook_id, *, timeout: Optional[float] = None) -> Webhook:
    req = client.build_request('GET', f"{HOOKS_PATH}/{webhook_id}")
    response = client.send_request(req, timeout=timeout)
    return Webhook.from_dict(unwrap(response, 'hook'))


def list_webhooks(client: Client, params: Optional[ListParams] = None, *,
                  timeout: Optional[float] = None) -> List[Webhook]:
    """List webhooks. Order of the result is unspecified."""
    req = client.build_request('GET', HOOKS_PATH, params=params.to_query() if params else None)
    response = client.send_request(req, timeout=timeout)
    return [Webhook.from_dict(h) for h in unwrap_list(response, 'hooks')]


def create_webhook(client: Client, params: WebhookParams, *, timeout: Optional[float] = None) -> Webhook:
    req = client.build_request('POST', f"{HOOKS_PATH}/new", params.to_payload())
    response = client.send_request(req, timeout=timeout)
    return Webhook.from_dict(unwrap(response, 'hook'))


def edit_webhook(client: Client, params: WebhookParams, create_if_not_exists: bool = False, *,
                 timeout: Optional[float] = None) -> Webhook:
    """Edit a webhook by ID.

    PATCH edits an existing webhook; with `create_if_not_exists` a PUT is sent,
    which creates the webhook when the ID is unknown.
    """
    if params.id is None:
        raise InvalidIDError("invalid webhook id")

    method = 'PUT' if create_if_not_exists else 'PATCH'
    req = client.build_request(method, f"{HOOKS_PATH}/{params.id}/update", params.to_payload())
    response = client.send_request(req, timeout=timeout)
    return Webhook.from_dict(unwrap(response, 'hook'))


def delete_webhook(client: Client, webhook_id, *, timeout: Optional[float] = None) -> None:
    req = client.build_request('DELETE', f"{HOOKS_PATH}/{webhook_id}/delete")
    client.send_request(req, timeout=timeout)
    logger.info(f"Deleted webhook {webhook_id}")


def list_webhook_triggers(client: Client, *, timeout: Optional[float] = None) -> List[WebhookTrigger]:
    """List the events webhooks can subscribe to, in no particular order."""
    req = client.build_request('GET', f"{HOOKS_PATH}/triggers")
    response = client.send_request(req, timeout=timeout)

    triggers = require_object(response, 'response').get('triggers') or {}
    if not isinstance(triggers, dict):
        triggers = {}

    return [
        WebhookTrigger(name=name,
                       label=require_object(info, name).get('label'),
                       description=info.get('description'))
        for name, info in triggers.items()
    ]
