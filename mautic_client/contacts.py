"""
Contact endpoints of the Mautic API.
Contacts live under /api/contacts; single contacts are wrapped under "contact",
lists are an id -> contact mapping under "contacts".
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .client import Client
from .errors import InvalidIDError
from .models import ListParams, flatten_entities, parse_datetime, require_object, unwrap, unwrap_list

logger = logging.getLogger(__name__)

CONTACTS_PATH = '/api/contacts'


@dataclass
class ContactOwner:
    id: Optional[int] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ContactOwner':
        return cls(
            id=data.get('id'),
            username=data.get('username'),
            first_name=data.get('firstName'),
            last_name=data.get('lastName'),
        )


@dataclass
class IpDetails:
    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    isp: Optional[str] = None
    organization: Optional[str] = None
    timezone: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'IpDetails':
        return cls(
            city=data.get('city'),
            region=data.get('region'),
            country=data.get('country'),
            latitude=data.get('latitude'),
            longitude=data.get('longitude'),
            isp=data.get('isp'),
            organization=data.get('organization'),
            timezone=data.get('timezone'),
        )


@dataclass
class IpAddress:
    ip_address: Optional[str] = None
    ip_details: Optional[IpDetails] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'IpAddress':
        details = data.get('ipDetails')
        return cls(
            ip_address=data.get('ipAddress'),
            ip_details=IpDetails.from_dict(details) if isinstance(details, dict) else None,
        )


@dataclass
class UtmTag:
    id: Optional[int] = None
    query: Dict[str, Any] = field(default_factory=dict)
    referer: Optional[str] = None
    remote_host: Optional[str] = None
    user_agent: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_content: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_source: Optional[str] = None
    utm_term: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UtmTag':
        return cls(
            id=data.get('id'),
            query=data.get('query') or {},
            referer=data.get('referer'),
            remote_host=data.get('remoteHost'),
            user_agent=data.get('userAgent'),
            utm_campaign=data.get('utmCampaign'),
            utm_content=data.get('utmContent'),
            utm_medium=data.get('utmMedium'),
            utm_source=data.get('utmSource'),
            utm_term=data.get('utmTerm'),
        )


@dataclass
class DoNotContact:
    id: Optional[int] = None
    reason: Optional[int] = None
    comments: Optional[str] = None
    channel: Optional[str] = None
    channel_id: Optional[Any] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DoNotContact':
        return cls(
            id=data.get('id'),
            reason=data.get('reason'),
            comments=data.get('comments'),
            channel=data.get('channel'),
            channel_id=data.get('channelId'),
        )


@dataclass
class Contact:
    """A contact (lead) record."""
    id: int
    date_added: Optional[datetime] = None
    created_by: Optional[int] = None
    created_by_user: Optional[str] = None
    date_modified: Optional[datetime] = None
    modified_by: Optional[int] = None
    modified_by_user: Optional[str] = None
    owner: Optional[ContactOwner] = None
    points: int = 0
    last_active: Optional[datetime] = None
    date_identified: Optional[datetime] = None
    color: Optional[str] = None
    ip_addresses: Dict[str, IpAddress] = field(default_factory=dict)
    fields: Dict[str, Any] = field(default_factory=dict)
    utm_tags: List[UtmTag] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    do_not_contact: List[DoNotContact] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Contact':
        owner = data.get('owner')

        # Empty PHP arrays arrive as [] instead of {}
        ip_addresses = {}
        raw_ips = data.get('ipAddresses') or {}
        if isinstance(raw_ips, dict):
            for ip, details in raw_ips.items():
                ip_addresses[ip] = IpAddress.from_dict(require_object(details, 'ipAddresses'))
        else:
            for details in raw_ips:
                entry = IpAddress.from_dict(require_object(details, 'ipAddresses'))
                if entry.ip_address is None:
                    logger.debug(f"Skipping ipAddresses entry without ipAddress on contact {data.get('id')}")
                    continue
                ip_addresses[entry.ip_address] = entry

        return cls(
            id=data.get('id'),
            date_added=parse_datetime(data.get('dateAdded')),
            created_by=data.get('createdBy'),
            created_by_user=data.get('createdByUser'),
            date_modified=parse_datetime(data.get('dateModified')),
            modified_by=data.get('modifiedBy'),
            modified_by_user=data.get('modifiedByUser'),
            owner=ContactOwner.from_dict(owner) if isinstance(owner, dict) else None,
            points=data.get('points') or 0,
            last_active=parse_datetime(data.get('lastActive')),
            date_identified=parse_datetime(data.get('dateIdentified')),
            color=data.get('color'),
            ip_addresses=ip_addresses,
            fields=data.get('fields') or {},
            utm_tags=[UtmTag.from_dict(t) for t in flatten_entities(data.get('utmtags'), 'utmtags')],
            tags=[t.get('tag') for t in flatten_entities(data.get('tags'), 'tags')],
            do_not_contact=[DoNotContact.from_dict(d)
                            for d in flatten_entities(data.get('doNotContact'), 'doNotContact')],
        )


@dataclass
class ContactParams:
    """Fields sent when creating or editing a contact.

    Custom field values in `fields` are sent as top-level keys, keyed by
    field alias. `id` selects the contact to edit and is never sent.
    """
    fields: Dict[str, Any] = field(default_factory=dict)
    ip_address: Optional[str] = None
    last_active: Optional[str] = None
    owner: Optional[int] = None
    overwrite_with_blank: Optional[bool] = None
    id: Optional[int] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = dict(self.fields)

        if self.ip_address is not None:
            payload['ipAddress'] = self.ip_address
        if self.last_active is not None:
            payload['lastActive'] = self.last_active
        if self.owner is not None:
            payload['owner'] = self.owner
        if self.overwrite_with_blank is not None:
            payload['overwriteWithBlank'] = self.overwrite_with_blank

        return payload


def get_contact(client: Client, contact_id, *, timeout: Optional[float] = None) -> Contact:
    """Get a contact by its ID."""
    req = client.build_request('GET', f"{CONTACTS_PATH}/{contact_id}")
    response = client.send_request(req, timeout=timeout)
    return Contact.from_dict(unwrap(response, 'contact'))


def list_contacts(client: Client, params: Optional[ListParams] = None, *,
                  timeout: Optional[float] = None) -> List[Contact]:
    """List contacts.

    Results come back keyed by ID; the returned list is in no particular order.
    """
    req = client.build_request('GET', CONTACTS_PATH, params=params.to_query() if params else None)
    response = client.send_request(req, timeout=timeout)
    return [Contact.from_dict(c) for c in unwrap_list(response, 'contacts')]


def create_contact(client: Client, params: ContactParams, *, timeout: Optional[float] = None) -> Contact:
    """Create a contact. If it already exists, the existing contact is returned."""
    req = client.build_request('POST', f"{CONTACTS_PATH}/new", params.to_payload())
    response = client.send_request(req, timeout=timeout)
    return Contact.from_dict(unwrap(response, 'contact'))


def create_contacts(client: Client, params: List[ContactParams], *,
                    timeout: Optional[float] = None) -> List[Contact]:
    """Create several contacts in one request.

    Partial failures are reported however the API reports them; existing
    contacts are returned as they are.
    """
    payload = [p.to_payload() for p in params]
    req = client.build_request('POST', f"{CONTACTS_PATH}/new", payload)
    response = client.send_request(req, timeout=timeout)
    contacts = [Contact.from_dict(c) for c in unwrap_list(response, 'contacts')]
    logger.info(f"Batch create returned {len(contacts)} of {len(payload)} contacts")
    return contacts


def edit_contact(client: Client, params: ContactParams, create_if_not_exists: bool = False, *,
                 timeout: Optional[float] = None) -> Contact:
    """Edit a contact.

    PATCH edits an existing contact; with `create_if_not_exists` a PUT is sent,
    which creates the contact when the ID is unknown.
    """
    if params.id is None:
        raise InvalidIDError("invalid contact id")

    method = 'PUT' if create_if_not_exists else 'PATCH'
    req = client.build_request(method, f"{CONTACTS_PATH}/{params.id}/edit", params.to_payload())
    response = client.send_request(req, timeout=timeout)
    return Contact.from_dict(unwrap(response, 'contact'))


def delete_contact(client: Client, contact_id, *, timeout: Optional[float] = None) -> None:
    req = client.build_request('DELETE', f"{CONTACTS_PATH}/{contact_id}/delete")
    client.send_request(req, timeout=timeout)
    logger.info(f"Deleted contact {contact_id}")
