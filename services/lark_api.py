"""
Lark Open API HTTP 호출 공통 모듈
"""
import logging
import requests
from config import Config

logger = logging.getLogger(__name__)


def call_lark(method, path, token=None, payload=None, base_url=None, timeout=None):
    """
    Lark Open API 호출 후 JSON 응답(envelope) 반환.

    응답의 code 값은 확인하지 않는다 (호출자가 판단).
    연결 오류/타임아웃/JSON 디코딩 실패는 그대로 전파된다.
    """
    url = f"{(base_url or Config.LARK_API_BASE).rstrip('/')}{path}"
    headers = {'Content-Type': 'application/json; charset=utf-8'}
    if token:
        headers['Authorization'] = f"Bearer {token}"

    response = requests.request(
        method,
        url,
        headers=headers,
        json=payload,
        timeout=timeout if timeout is not None else Config.LARK_TIMEOUT_SECONDS,
    )
    try:
        data = response.json()
    except ValueError:
        logger.error(f"Lark 응답 JSON 파싱 실패: {method} {path} (HTTP {response.status_code})")
        raise
    logger.debug(f"Lark 응답: {method} {path} code={data.get('code')}")
    return data
