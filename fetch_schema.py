"""
Lark Base 테이블 필드 목록을 fields.json으로 저장 (매핑 필드 이름 확인용)
"""
import argparse
import json
import logging
from dotenv import load_dotenv

load_dotenv()

from config import Config
from models import ConnectionConfig
from services.bitable_service import list_fields
from services.lark_auth_service import get_tenant_access_token

logger = logging.getLogger(__name__)


def fetch_schema(config):
    """프로젝트 테이블 (+ 일정 테이블이 설정돼 있으면) 필드 목록"""
    token = get_tenant_access_token(config.app_id, config.app_secret)

    output = {
        "project": [f.to_dict() for f in list_fields(token, config.app_token, config.project_table_id)],
    }
    if config.schedule_table_id:
        output["schedule"] = [
            f.to_dict() for f in list_fields(token, config.app_token, config.schedule_table_id)
        ]
    return output


def main(argv=None):
    parser = argparse.ArgumentParser(description="Lark Base 필드 목록 저장")
    parser.add_argument('-o', '--output', default='fields.json')
    args = parser.parse_args(argv)

    logging.basicConfig(level=Config.LOG_LEVEL, format='[%(levelname)s] %(message)s')
    config = ConnectionConfig.from_settings(vars(Config))
    print(f"App ID: {config.app_id}")
    print(f"App Token: {config.app_token}")

    missing = config.missing_credentials()
    if missing:
        print(f"연결 설정이 없습니다: {', '.join(missing)}")
        return 1

    try:
        output = fetch_schema(config)
    except Exception as e:
        logger.error(f"필드 조회 실패: {e}")
        return 1

    with open(args.output, 'w', encoding='utf-8') as f:
        json.dump(output, f, ensure_ascii=False, indent=2)
    print(f"필드 목록 저장: {args.output}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
