"""
로그인 세션 / 연결 설정 저장소 (브라우저 세션 쿠키 기반)
"""
import json
import logging

from models import UserSession
from services.lark_auth_service import new_oauth_state

logger = logging.getLogger(__name__)

USER_KEY = 'lark_user'
CONFIG_KEY = 'lark_config'
OAUTH_STATE_KEY = 'lark_oauth_state'


class SessionStore:
    """
    사용자 정보와 연결 설정을 JSON 문자열로 보관.

    storage는 dict처럼 동작하는 객체 (웹에서는 flask.session).
    """

    def __init__(self, storage):
        self.storage = storage

    def _load_json(self, key):
        raw = self.storage.get(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"저장된 값이 손상되어 삭제함: {key}")
            self.storage.pop(key, None)
            return None

    def _save_json(self, key, value):
        self.storage[key] = json.dumps(value, ensure_ascii=False)

    # ===== 연결 설정 =====

    def load_config(self, defaults):
        """환경 변수 기본값 + 사용자가 저장한 설정 (저장된 값 우선)"""
        saved = self._load_json(CONFIG_KEY)
        if not isinstance(saved, dict):
            return defaults
        return defaults.merged(saved)

    def save_config(self, config):
        self._save_json(CONFIG_KEY, config.to_dict())
        logger.info("연결 설정 저장")

    # ===== 사용자 =====

    def load_user(self):
        saved = self._load_json(USER_KEY)
        if not isinstance(saved, dict):
            return None
        return UserSession.from_dict(saved)

    def save_user(self, user):
        self._save_json(USER_KEY, user.to_dict())
        logger.info(f"로그인: {user.name} ({user.open_id})")

    def logout(self):
        self.storage.pop(USER_KEY, None)

    # ===== OAuth state =====

    def issue_oauth_state(self):
        state = new_oauth_state()
        self.storage[OAUTH_STATE_KEY] = state
        return state

    def pop_oauth_state(self):
        return self.storage.pop(OAUTH_STATE_KEY, None)

    def clear(self):
        for key in (USER_KEY, CONFIG_KEY, OAUTH_STATE_KEY):
            self.storage.pop(key, None)
