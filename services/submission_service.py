"""
프로젝트 등록 서비스 - 토큰 발급 → 프로젝트 레코드 생성 → 일정 레코드 순차 생성
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from requests import RequestException

from models import FormState
from services.bitable_service import create_record
from services.field_mapper import map_project_fields, map_schedule_fields
from services.lark_auth_service import get_tenant_access_token
from utils.errors import ConfigurationError, LarkError, MissingIdentifierError

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    IDLE = 'idle'
    AUTHENTICATING = 'authenticating'
    CREATING_PROJECT = 'creating_project'
    CREATING_SCHEDULE = 'creating_schedule'
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'


@dataclass
class SubmissionResult:
    state: SubmissionState
    project_record_id: Optional[str] = None
    schedule_record_ids: List[str] = field(default_factory=list)
    failed_day: Optional[int] = None
    error: Optional[Exception] = None
    schedule_skipped: bool = False

    @property
    def succeeded(self):
        return self.state == SubmissionState.SUCCEEDED

    @property
    def cancelled(self):
        return self.state == SubmissionState.IDLE

    def to_dict(self):
        return {
            "success": self.succeeded,
            "state": self.state.value,
            "project_record_id": self.project_record_id,
            "schedule_record_ids": list(self.schedule_record_ids),
            "failed_day": self.failed_day,
            "schedule_skipped": self.schedule_skipped,
            "error": str(self.error) if self.error else None,
        }


def extract_record_id(record):
    """생성된 레코드의 ID (record_id 우선, 없으면 id)"""
    record = record or {}
    return record.get('record_id') or record.get('id')


class SubmissionOrchestrator:
    """
    등록 폼 1건 제출.

    일정은 하루씩 순서대로 생성하며 실패하면 즉시 중단한다.
    이미 생성된 레코드는 되돌리지 않는다.
    성공하면 폼을 초기 상태로 되돌리고, 실패하면 폼을 그대로 둔다.
    """

    def __init__(self, config, form, get_token=get_tenant_access_token, create=create_record):
        self.config = config
        self.form = form
        self.state = SubmissionState.IDLE
        self.current_day = None
        self._get_token = get_token
        self._create = create

    def submit(self, confirm_without_schedule=lambda: False):
        """
        confirm_without_schedule: 일정 테이블 ID가 없을 때 일정 없이 진행할지 묻는 콜백.
        거절하면 네트워크 호출 없이 IDLE 상태로 돌아간다.
        """
        result = SubmissionResult(state=SubmissionState.IDLE)

        missing = self.config.missing_credentials()
        if missing:
            error = ConfigurationError(
                f"Lark 연결 설정이 없습니다: {', '.join(missing)}", missing=missing)
            return self._fail(result, error)

        schedule_table_id = self.config.schedule_table_id
        if not schedule_table_id:
            if not confirm_without_schedule():
                logger.info("일정 테이블 미설정 - 사용자가 제출을 취소함")
                return result
            result.schedule_skipped = True

        try:
            self.state = SubmissionState.AUTHENTICATING
            token = self._get_token(self.config.app_id, self.config.app_secret)

            self.state = SubmissionState.CREATING_PROJECT
            project_fields = map_project_fields(self.form.project)
            record = self._create(token, self.config.app_token,
                                  self.config.project_table_id, project_fields)
            project_id = extract_record_id(record)
            if not project_id:
                raise MissingIdentifierError("프로젝트 레코드 ID를 확인할 수 없습니다.", record=record)
            result.project_record_id = project_id
            logger.info(f"프로젝트 레코드 생성: {project_id} ({self.form.project.project_name})")

            if schedule_table_id:
                for i, day in enumerate(self.form.days):
                    self.state = SubmissionState.CREATING_SCHEDULE
                    self.current_day = i + 1
                    day_fields = map_schedule_fields(day, i, project_id)
                    day_record = self._create(token, self.config.app_token,
                                              schedule_table_id, day_fields)
                    result.schedule_record_ids.append(extract_record_id(day_record))
                    logger.info(f"일정 레코드 생성: Day {i + 1} / {project_id}")
        except (LarkError, RequestException) as e:
            if self.state == SubmissionState.CREATING_SCHEDULE:
                result.failed_day = self.current_day
            return self._fail(result, e)

        self.state = SubmissionState.SUCCEEDED
        self.current_day = None
        result.state = self.state
        self.form = FormState.initial()
        logger.info(f"등록 완료: {result.project_record_id} (일정 {len(result.schedule_record_ids)}건)")
        return result

    def _fail(self, result, error):
        logger.error(f"등록 실패 ({self.state.value}): {error}")
        self.state = SubmissionState.FAILED
        result.state = self.state
        result.error = error
        return result
