import pytest


FIELD = {
    "id": 12,
    "label": "Foo",
    "alias": "foo",
    "type": "select",
    "group": "core",
    "order": 4,
    "object": "lead",
    "defaultValue": None,
    "isPublished": True,
    "isRequired": False,
    "isPubliclyUpdatable": False,
    "isUniqueIdentifier": 0,
    "dateAdded": "2024-01-05T12:00:00+00:00",
    "dateModified": None,
    "properties": {"list": [{"label": "Red", "value": "red"}, {"label": "Blue", "value": "blue"}]},
}


def test_get_field(client, session):
    from mautic_client import FieldType, get_field

    session.reply(json_data={"field": FIELD})

    field = get_field(client, FieldType.CONTACT, 12)
    assert field.id == 12
    assert field.alias == "foo"
    assert field.is_published is True
    assert field.is_unique_identifier is False
    assert [o.value for o in field.properties.options] == ["red", "blue"]
    assert session.last_request.url == "https://mautic.example.com/fields/contact/12"


def test_field_type_accepts_plain_string(client, session):
    from mautic_client import get_field

    session.reply(json_data={"field": FIELD})

    get_field(client, "company", 12)
    assert session.last_request.url == "https://mautic.example.com/fields/company/12"


def test_unknown_field_type_rejected(client, session):
    from mautic_client import get_field

    with pytest.raises(ValueError):
        get_field(client, "campaign", 12)
    assert session.sent == []


def test_list_fields_with_params(client, session):
    from mautic_client import FieldType, ListParams, list_fields

    session.reply(json_data={"total": 2, "fields": [FIELD, dict(FIELD, id=13, properties=[])]})

    fields = list_fields(client, FieldType.CONTACT, ListParams(start=0, published_only=True, order_by="label"))
    assert sorted(f.id for f in fields) == [12, 13]
    assert session.last_request.url == (
        "https://mautic.example.com/fields/contact?start=0&orderBy=label&publishedOnly=true"
    )


def test_list_fields_accepts_id_mapping(client, session):
    from mautic_client import FieldType, list_fields

    session.reply(json_data={"total": 1, "fields": {"12": FIELD}})

    fields = list_fields(client, FieldType.CONTACT)
    assert [f.id for f in fields] == [12]
    assert session.last_request.url == "https://mautic.example.com/fields/contact"


def test_create_field_sends_every_attribute(client, session):
    from mautic_client import FieldParams, FieldType, create_field

    echoed = dict(FIELD, type="text", properties=None)
    session.reply(json_data={"field": echoed})

    field = create_field(client, FieldType.CONTACT, FieldParams(label="Foo", alias="foo"))

    assert session.last_request.method == "POST"
    assert session.last_request.url == "https://mautic.example.com/fields/contact/new"
    body = session.last_request.body.decode()
    assert body.startswith('{"label":"Foo","alias":"foo",')
    assert session.last_json() == {
        "label": "Foo",
        "alias": "foo",
        "description": None,
        "type": "",
        "group": "",
        "order": 0,
        "object": "",
        "defaultValue": "",
        "isRequired": False,
        "isPubliclyAvailable": False,
        "isUniqueIdentifier": False,
        "properties": None,
    }
    assert field.label == "Foo"
    assert field.type == "text"
    assert field.properties is None


def test_create_field_with_options(client, session):
    from mautic_client import FieldOption, FieldParams, FieldProperties, FieldType, create_field

    session.reply(json_data={"field": FIELD})

    params = FieldParams(label="Colour", alias="colour", type="select",
                         properties=FieldProperties(options=[FieldOption("Red", "red")]))
    create_field(client, FieldType.CONTACT, params)
    assert session.last_json()["properties"] == {"list": [{"label": "Red", "value": "red"}]}


@pytest.mark.parametrize("create_if_not_exists,method", [(False, "PATCH"), (True, "PUT")])
def test_edit_field_method(client, session, create_if_not_exists, method):
    from mautic_client import FieldParams, FieldType, edit_field

    session.reply(json_data={"field": FIELD})

    edit_field(client, FieldType.COMPANY, FieldParams(id=12, label="Foo"), create_if_not_exists)
    assert session.last_request.method == method
    assert session.last_request.url == "https://mautic.example.com/fields/company/12/edit"
    assert "id" not in session.last_json()


def test_edit_field_without_id_makes_no_call(client, session):
    from mautic_client import FieldParams, FieldType, InvalidIDError, edit_field

    with pytest.raises(InvalidIDError):
        edit_field(client, FieldType.CONTACT, FieldParams(label="Foo"))
    assert session.sent == []


def test_delete_field(client, session):
    from mautic_client import FieldType, delete_field

    response = session.reply(json_data={"field": FIELD})

    delete_field(client, FieldType.CONTACT, 12)
    assert session.last_request.method == "DELETE"
    assert session.last_request.url == "https://mautic.example.com/fields/contact/12/delete"
    assert response.closed is True


def test_delete_field_error_status(client, session):
    from mautic_client import ApiError, FieldType, delete_field

    session.reply(status_code=403, json_data={"errors": [{"message": "You do not have access.", "code": 403}]})

    with pytest.raises(ApiError) as excinfo:
        delete_field(client, FieldType.CONTACT, 12)
    assert excinfo.value.status_code == 403
