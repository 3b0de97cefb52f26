"""
Lark 연동 예외 정의
"""


class LarkError(Exception):
    """Lark 연동 오류의 공통 부모"""


class ConfigurationError(LarkError):
    """필수 연결 설정(App ID/Secret, 테이블 ID 등) 누락 - 네트워크 호출 전에 감지"""

    def __init__(self, message, missing=None):
        super().__init__(message)
        self.missing = list(missing or [])


class AuthError(LarkError):
    """토큰 발급/교환 실패 (code != 0)"""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


class ApiError(LarkError):
    """레코드 생성/필드 조회 실패 (code != 0)"""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


class LinkFieldError(ApiError):
    """연결(Link) 필드 참조 오류"""


class MissingIdentifierError(LarkError):
    """레코드는 생성됐지만 응답에 record_id가 없음"""

    def __init__(self, message, record=None):
        super().__init__(message)
        self.record = record
