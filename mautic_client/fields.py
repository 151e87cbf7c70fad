"""
Custom field endpoints of the Mautic API.
Fields belong either to contacts or to companies and live under /fields/<type>.
"""

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .client import Client
from .errors import InvalidIDError
from .models import ListParams, flatten_entities, parse_datetime, unwrap, unwrap_list

logger = logging.getLogger(__name__)


class FieldType(enum.Enum):
    COMPANY = 'company'
    CONTACT = 'contact'


def _fields_path(field_type: Union[FieldType, str]) -> str:
    return f"/fields/{FieldType(field_type).value}"


@dataclass
class FieldOption:
    label: str = ''
    value: str = ''

    def to_payload(self) -> Dict[str, Any]:
        return {'label': self.label, 'value': self.value}


@dataclass
class FieldProperties:
    """Extra settings of a field; `options` holds the choices of select/list fields."""
    options: List[FieldOption] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Optional['FieldProperties']:
        if not isinstance(data, dict):
            return None
        return cls(options=[FieldOption(label=o.get('label', ''), value=o.get('value', ''))
                            for o in flatten_entities(data.get('list'), 'list')])

    def to_payload(self) -> Dict[str, Any]:
        return {'list': [o.to_payload() for o in self.options]}


@dataclass
class Field:
    """A custom contact or company field."""
    id: int
    label: Optional[str] = None
    alias: Optional[str] = None
    type: Optional[str] = None
    group: Optional[str] = None
    order: int = 0
    object: Optional[str] = None
    default_value: Any = None
    is_published: bool = False
    is_required: bool = False
    is_publicly_updatable: bool = False
    is_unique_identifier: bool = False
    date_added: Optional[datetime] = None
    created_by: Optional[int] = None
    created_by_user: Optional[str] = None
    date_modified: Optional[datetime] = None
    modified_by: Optional[int] = None
    modified_by_user: Optional[str] = None
    properties: Optional[FieldProperties] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Field':
        return cls(
            id=data.get('id'),
            label=data.get('label'),
            alias=data.get('alias'),
            type=data.get('type'),
            group=data.get('group'),
            order=data.get('order') or 0,
            object=data.get('object'),
            default_value=data.get('defaultValue'),
            is_published=bool(data.get('isPublished')),
            is_required=bool(data.get('isRequired')),
            is_publicly_updatable=bool(data.get('isPubliclyUpdatable')),
            # Sent as 0/1 by the API
            is_unique_identifier=bool(data.get('isUniqueIdentifier')),
            date_added=parse_datetime(data.get('dateAdded')),
            created_by=data.get('createdBy'),
            created_by_user=data.get('createdByUser'),
            date_modified=parse_datetime(data.get('dateModified')),
            modified_by=data.get('modifiedBy'),
            modified_by_user=data.get('modifiedByUser'),
            properties=FieldProperties.from_dict(data.get('properties')),
        )


@dataclass
class FieldParams:
    """Body of a create or edit request.

    Every attribute except `id` is sent, including empty ones.
    """
    label: str = ''
    alias: str = ''
    description: Optional[str] = None
    type: str = ''
    group: str = ''
    order: int = 0
    object: str = ''
    default_value: str = ''
    is_required: bool = False
    is_publicly_available: bool = False
    is_unique_identifier: bool = False
    properties: Optional[FieldProperties] = None
    id: Optional[int] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            'label': self.label,
            'alias': self.alias,
            'description': self.description,
            'type': self.type,
            'group': self.group,
            'order': self.order,
            'object': self.object,
            'defaultValue': self.default_value,
            'isRequired': self.is_required,
            'isPubliclyAvailable': self.is_publicly_available,
            'isUniqueIdentifier': self.is_unique_identifier,
            'properties': self.properties.to_payload() if self.properties else None,
        }


def get_field(client: Client, field_type: Union[FieldType, str], field_id: int, *,
              timeout: Optional[float] = None) -> Field:
    req = client.build_request('GET', f"{_fields_path(field_type)}/{field_id}")
    response = client.send_request(req, timeout=timeout)
    return Field.from_dict(unwrap(response, 'field'))


def list_fields(client: Client, field_type: Union[FieldType, str], params: Optional[ListParams] = None, *,
                timeout: Optional[float] = None) -> List[Field]:
    """List fields of one type.

    `params` filters the results:
        search - string or search command to filter by
        start - record number to start at (API default 0)
        limit - maximum records to return (API default 30)
        order_by / order_by_dir - sort column and direction (asc or desc)
        published_only - only currently published fields
        minimal - entities only, without additional lists
    """
    req = client.build_request('GET', _fields_path(field_type), params=params.to_query() if params else None)
    response = client.send_request(req, timeout=timeout)
    return [Field.from_dict(f) for f in unwrap_list(response, 'fields')]


def create_field(client: Client, field_type: Union[FieldType, str], params: FieldParams, *,
                 timeout: Optional[float] = None) -> Field:
    req = client.build_request('POST', f"{_fields_path(field_type)}/new", params.to_payload())
    response = client.send_request(req, timeout=timeout)
    return Field.from_dict(unwrap(response, 'field'))


def edit_field(client: Client, field_type: Union[FieldType, str], params: FieldParams,
               create_if_not_exists: bool = False, *, timeout: Optional[float] = None) -> Field:
    """Edit a field by ID.

    PATCH edits an existing field; with `create_if_not_exists` a PUT is sent,
    which creates the field when the ID is unknown.
    """
    if params.id is None:
        raise InvalidIDError("invalid field id")

    method = 'PUT' if create_if_not_exists else 'PATCH'
    req = client.build_request(method, f"{_fields_path(field_type)}/{params.id}/edit", params.to_payload())
    response = client.send_request(req, timeout=timeout)
    return Field.from_dict(unwrap(response, 'field'))


def delete_field(client: Client, field_type: Union[FieldType, str], field_id: int, *,
                 timeout: Optional[float] = None) -> None:
    req = client.build_request('DELETE', f"{_fields_path(field_type)}/{field_id}/delete")
    client.send_request(req, timeout=timeout)
    logger.info(f"Deleted {FieldType(field_type).value} field {field_id}")
