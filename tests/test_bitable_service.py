import pytest

from services.bitable_service import create_record, list_fields
from utils.errors import ApiError, LinkFieldError

TABLE = '/bitable/v1/apps/bascnAppToken/tables/tblProject'


def test_list_fields(fake_lark):
    fake_lark.add('GET', TABLE + '/fields', {"code": 0, "data": {"items": [
        {"field_name": "ProjectName", "type": 1},
        {"field_name": "DayNo", "type": 2},
    ]}})

    fields = list_fields('t-1', 'bascnAppToken', 'tblProject')

    assert [f.to_dict() for f in fields] == [
        {"name": "ProjectName", "type": 1},
        {"name": "DayNo", "type": 2},
    ]
    assert fake_lark.calls[0]["headers"]["Authorization"] == 'Bearer t-1'


def test_list_fields_error(fake_lark):
    fake_lark.add('GET', TABLE + '/fields', {"code": 91402, "msg": "NOTEXIST"})

    with pytest.raises(ApiError, match='NOTEXIST'):
        list_fields('t-1', 'bascnAppToken', 'tblProject')


def test_create_record(fake_lark):
    fake_lark.add('POST', TABLE + '/records', {"code": 0, "data": {
        "record": {"record_id": "recA", "fields": {"ProjectName": "X"}}}})

    record = create_record('t-1', 'bascnAppToken', 'tblProject', {"ProjectName": "X"})

    assert record["record_id"] == 'recA'
    assert fake_lark.calls[0]["json"] == {"fields": {"ProjectName": "X"}}


def test_create_record_generic_error(fake_lark):
    fake_lark.add('POST', TABLE + '/records', {"code": 1254045, "msg": "FieldNameNotFound"})

    with pytest.raises(ApiError) as exc_info:
        create_record('t-1', 'bascnAppToken', 'tblProject', {})
    assert not isinstance(exc_info.value, LinkFieldError)
    assert 'FieldNameNotFound' in str(exc_info.value)


def test_create_record_link_field_error(fake_lark):
    fake_lark.add('POST', TABLE + '/records', {"code": 1254068, "msg": "LinkFieldConvFail"})

    with pytest.raises(LinkFieldError) as exc_info:
        create_record('t-1', 'bascnAppToken', 'tblProject', {"ID": ["bad"]})
    assert 'Record ID' in str(exc_info.value)
    assert exc_info.value.code == 1254068


def test_undecodable_response_propagates(fake_lark):
    fake_lark.add('POST', TABLE + '/records', ValueError("not json"))

    with pytest.raises(ValueError):
        create_record('t-1', 'bascnAppToken', 'tblProject', {})
