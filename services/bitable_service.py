"""
Lark Bitable 레코드 서비스 - 필드 조회, 레코드 생성
"""
import logging

from models import FieldInfo
from services.lark_api import call_lark
from utils.errors import ApiError, LinkFieldError

logger = logging.getLogger(__name__)

LINK_FIELD_FAILURE = 'LinkFieldConvFail'


def _table_path(app_token, table_id):
    return f"/bitable/v1/apps/{app_token}/tables/{table_id}"


def list_fields(token, app_token, table_id, base_url=None, timeout=None):
    """테이블 필드(스키마) 목록"""
    data = call_lark(
        'GET', f"{_table_path(app_token, table_id)}/fields",
        token=token, base_url=base_url, timeout=timeout,
    )
    if data.get('code') != 0:
        raise ApiError(data.get('msg', ''), code=data.get('code'))

    items = (data.get('data') or {}).get('items') or []
    return [FieldInfo(name=item.get('field_name', ''), type=item.get('type')) for item in items]


def create_record(token, app_token, table_id, fields, base_url=None, timeout=None):
    """레코드 1건 생성 후 서버의 record 객체 반환"""
    data = call_lark(
        'POST', f"{_table_path(app_token, table_id)}/records",
        token=token, payload={"fields": fields},
        base_url=base_url, timeout=timeout,
    )
    if data.get('code') != 0:
        msg = data.get('msg') or ''
        logger.warning(f"레코드 생성 실패 ({table_id}): code={data.get('code')} msg={msg}")
        if LINK_FIELD_FAILURE in msg:
            raise LinkFieldError(
                "Link Error: 연결(Link) 필드 값이 올바르지 않습니다. "
                "필드 이름이 맞는지, 참조한 Record ID가 존재하는지 확인해주세요.",
                code=data.get('code'),
            )
        raise ApiError(f"Create Record Error: {msg}", code=data.get('code'))

    return (data.get('data') or {}).get('record') or {}
