import logging
from functools import wraps
from flask import jsonify
from requests import RequestException

from utils.errors import (
    ApiError,
    AuthError,
    ConfigurationError,
    MissingIdentifierError,
)

logger = logging.getLogger(__name__)

TRANSPORT_ERROR_MESSAGE = "Lark 서버에 연결할 수 없습니다."


def status_for(error):
    """예외 종류 → HTTP 상태 코드"""
    if isinstance(error, ConfigurationError):
        return 400
    if isinstance(error, AuthError):
        return 401
    if isinstance(error, (ApiError, MissingIdentifierError, RequestException)):
        return 502
    if isinstance(error, ValueError):
        return 400
    return 500


def error_message(error):
    """사용자에게 보여줄 오류 메시지 (연결 오류 상세는 숨김)"""
    if isinstance(error, RequestException):
        return TRANSPORT_ERROR_MESSAGE
    return str(error)


def handle_errors(f):
    """API 엔드포인트 에러 핸들링 데코레이터"""
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ConfigurationError as e:
            logger.warning(f"연결 설정 누락: {e}")
            return jsonify({"success": False, "error": str(e), "missing": e.missing}), status_for(e)
        except AuthError as e:
            logger.warning(f"인증 실패: {e}")
            return jsonify({"success": False, "error": str(e)}), status_for(e)
        except (ApiError, MissingIdentifierError) as e:
            logger.warning(f"Lark API 오류: {e}")
            return jsonify({"success": False, "error": str(e)}), status_for(e)
        except RequestException as e:
            logger.error(f"Lark 서버 연결 실패: {e}")
            return jsonify({"success": False, "error": error_message(e)}), status_for(e)
        except ValueError as e:
            logger.warning(f"잘못된 값: {e}")
            return jsonify({"success": False, "error": str(e)}), status_for(e)
        except Exception as e:
            logger.error(f"서버 오류: {e}", exc_info=True)
            return jsonify({"success": False, "error": "서버 내부 오류가 발생했습니다."}), 500
    return decorated
