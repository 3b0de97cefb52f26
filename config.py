import os
from datetime import timedelta

class Config:
    """애플리케이션 설정"""

    # 보안
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'project-registration-secret-key'
    PERMANENT_SESSION_LIFETIME = timedelta(days=30)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Lark Open API
    LARK_API_BASE = os.environ.get('LARK_API_BASE') or 'https://open.larksuite.com/open-apis'
    LARK_TIMEOUT_SECONDS = float(os.environ.get('LARK_TIMEOUT_SECONDS', 10))
    LARK_OAUTH_SCOPE = 'contact:user.id:readonly'

    # 연결 설정 기본값 (사용자 설정으로 덮어쓸 수 있음)
    LARK_APP_ID = os.environ.get('LARK_APP_ID', '')
    LARK_APP_SECRET = os.environ.get('LARK_APP_SECRET', '')
    LARK_APP_TOKEN = os.environ.get('LARK_APP_TOKEN', '')
    LARK_PROJECT_TABLE_ID = os.environ.get('LARK_PROJECT_TABLE_ID', '')
    LARK_SCHEDULE_TABLE_ID = os.environ.get('LARK_SCHEDULE_TABLE_ID', '')

    # 로그
    LOG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'logs')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # 서버
    HOST = '0.0.0.0'
    PORT = int(os.environ.get('PORT', 5000))
    DEBUG = os.environ.get('FLASK_ENV') == 'development'
