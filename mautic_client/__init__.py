"""
Client library for the Mautic marketing-automation REST API.
Covers contacts, custom fields and webhooks.
"""

from .config import ClientConfig
from .client import Client, Decode, decode_response
from .errors import (
    ApiError,
    ConfigMissingError,
    DecodeError,
    InvalidIDError,
    MauticError,
    SerializationError,
    TransportError,
)
from .models import ListParams
from .contacts import (
    Contact,
    ContactParams,
    create_contact,
    create_contacts,
    delete_contact,
    edit_contact,
    get_contact,
    list_contacts,
)
from .fields import (
    Field,
    FieldOption,
    FieldParams,
    FieldProperties,
    FieldType,
    create_field,
    delete_field,
    edit_field,
    get_field,
    list_fields,
)
from .webhooks import (
    Webhook,
    WebhookParams,
    WebhookTrigger,
    create_webhook,
    delete_webhook,
    edit_webhook,
    get_webhook,
    list_webhook_triggers,
    list_webhooks,
)

__all__ = [
    'ClientConfig',
    'Client',
    'Decode',
    'decode_response',
    'ApiError',
    'ConfigMissingError',
    'DecodeError',
    'InvalidIDError',
    'MauticError',
    'SerializationError',
    'TransportError',
    'ListParams',
    'Contact',
    'ContactParams',
    'create_contact',
    'create_contacts',
    'delete_contact',
    'edit_contact',
    'get_contact',
    'list_contacts',
    'Field',
    'FieldOption',
    'FieldParams',
    'FieldProperties',
    'FieldType',
    'create_field',
    'delete_field',
    'edit_field',
    'get_field',
    'list_fields',
    'Webhook',
    'WebhookParams',
    'WebhookTrigger',
    'create_webhook',
    'delete_webhook',
    'edit_webhook',
    'get_webhook',
    'list_webhook_triggers',
    'list_webhooks',
]
