"""
Lark 인증 서비스 - tenant access token 발급, OAuth 로그인(OIDC 코드 교환)
"""
import hmac
import logging
import secrets
from urllib.parse import quote

from config import Config
from models import UserToken
from services.lark_api import call_lark
from utils.errors import AuthError

logger = logging.getLogger(__name__)

AUTHORIZE_URL = 'https://open.larksuite.com/open-apis/authen/v1/authorize'


def get_tenant_access_token(app_id, app_secret, base_url=None, timeout=None):
    """앱 자격 증명으로 tenant access token 발급"""
    data = call_lark(
        'POST', '/auth/v3/tenant_access_token/internal',
        payload={"app_id": app_id, "app_secret": app_secret},
        base_url=base_url, timeout=timeout,
    )
    if data.get('code') != 0:
        logger.warning(f"tenant access token 발급 실패: code={data.get('code')}")
        raise AuthError(data.get('msg', ''), code=data.get('code'))
    return data['tenant_access_token']


def new_oauth_state():
    """로그인 요청마다 새로 생성하는 state 값 (콜백에서 검증)"""
    return secrets.token_urlsafe(24)


def verify_oauth_state(expected, received):
    if not expected or not received or not hmac.compare_digest(
            expected.encode('utf-8'), received.encode('utf-8')):
        raise AuthError("로그인 요청이 유효하지 않습니다. 다시 로그인해주세요.")


def get_authorization_url(app_id, redirect_uri, state, scope=None):
    """Lark 로그인 페이지 URL 생성"""
    return (
        f"{AUTHORIZE_URL}?app_id={app_id}"
        f"&redirect_uri={quote(redirect_uri, safe='')}"
        f"&scope={scope or Config.LARK_OAUTH_SCOPE}"
        f"&state={state}"
    )


def exchange_code_for_user_token(code, app_id, app_secret, base_url=None, timeout=None):
    """인증 코드 → 사용자 access token 교환 (tenant token으로 인증)"""
    tenant_token = get_tenant_access_token(app_id, app_secret, base_url=base_url, timeout=timeout)

    data = call_lark(
        'POST', '/authen/v1/oidc/access_token',
        token=tenant_token,
        payload={"grant_type": "authorization_code", "code": code},
        base_url=base_url, timeout=timeout,
    )
    if data.get('code') != 0:
        logger.warning(f"사용자 토큰 교환 실패: code={data.get('code')}")
        raise AuthError(data.get('msg', ''), code=data.get('code'))

    info = data.get('data') or {}
    return UserToken(
        access_token=info.get('access_token', ''),
        name=info.get('name') or "Lark User",
        avatar_url=info.get('avatar_url') or "",
        open_id=info.get('open_id') or "",
        refresh_token=info.get('refresh_token'),
        expires_in=info.get('expires_in'),
    )


def get_user_info(user_access_token, base_url=None, timeout=None):
    """사용자 정보 조회 (코드 교환 응답에 정보가 부족할 때)"""
    data = call_lark(
        'GET', '/authen/v1/user_info',
        token=user_access_token,
        base_url=base_url, timeout=timeout,
    )
    if data.get('code') != 0:
        raise AuthError(data.get('msg', ''), code=data.get('code'))
    return data.get('data') or {}
