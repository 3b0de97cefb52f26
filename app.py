"""
Project Registration - 프로젝트/일정 등록 폼 (Lark Base 연동)
"""
import os
import logging
from logging.handlers import RotatingFileHandler
from dotenv import load_dotenv

load_dotenv()

from flask import Flask
from config import Config
from models import ConnectionConfig
from routes import main_bp, api_bp


def _configure_logging(app):
    """파일 + 콘솔 로그 설정 (이미 설정돼 있으면 그대로 둠)"""
    os.makedirs(app.config['LOG_DIR'], exist_ok=True)
    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            RotatingFileHandler(
                os.path.join(app.config['LOG_DIR'], 'app.log'),
                maxBytes=1024 * 1024, backupCount=5, encoding='utf-8', delay=True,
            ),
            logging.StreamHandler(),
        ],
    )


def create_app(test_config=None):
    """Flask 애플리케이션 팩토리"""
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    _configure_logging(app)

    # 연결 설정 기본값은 시작 시 한 번만 읽음
    app.config['LARK_DEFAULTS'] = ConnectionConfig.from_settings(app.config)

    # Blueprint 등록
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)

    # 보안 헤더
    @app.after_request
    def set_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data: https:; "
            "connect-src 'self'"
        )
        return response

    return app


# Azure WebApp 호환을 위한 전역 인스턴스
app = create_app()


def main():
    """메인 실행 함수"""
    print("=" * 50)
    print("  Project Registration")
    print("=" * 50)
    print(f"  http://localhost:{Config.PORT}/")
    print(f"  Lark API: {Config.LARK_API_BASE}")
    print("=" * 50)

    if Config.DEBUG:
        app.run(debug=True, host=Config.HOST, port=Config.PORT)
    else:
        try:
            from waitress import serve
            print(f"Waitress 서버 시작 (포트: {Config.PORT})")
            serve(app, host=Config.HOST, port=Config.PORT)
        except Exception as e:
            print(f"서버 시작 오류: {e}")


if __name__ == '__main__':
    main()
