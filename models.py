"""
Project Registration - 데이터 모델
"""
from dataclasses import dataclass, field, fields, asdict, replace
from typing import List, Optional

PROJECT_TYPES = ('In-House', 'Public', 'Consulting')
PROJECT_STATUSES = ('WIP', 'Completed', 'Cancelled')
PAYMENT_STATUSES = ('Pending', 'Paid')

DEFAULT_START_TIME = '09:00'
DEFAULT_END_TIME = '17:00'


def _text(value):
    return '' if value is None else str(value)


@dataclass
class ConnectionConfig:
    """Lark Base 연결 설정"""
    app_id: str = ""
    app_secret: str = ""
    app_token: str = ""
    project_table_id: str = ""
    schedule_table_id: str = ""

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        return cls(**{k: _text(v).strip() for k, v in (data or {}).items() if k in known})

    @classmethod
    def from_settings(cls, settings):
        """LARK_* 설정값 (Flask config 또는 Config 클래스 속성)에서 생성"""
        return cls.from_dict({
            "app_id": settings.get('LARK_APP_ID'),
            "app_secret": settings.get('LARK_APP_SECRET'),
            "app_token": settings.get('LARK_APP_TOKEN'),
            "project_table_id": settings.get('LARK_PROJECT_TABLE_ID'),
            "schedule_table_id": settings.get('LARK_SCHEDULE_TABLE_ID'),
        })

    def merged(self, overrides):
        """저장된 사용자 설정을 얕게 병합 (알 수 없는 키는 무시)"""
        known = {f.name for f in fields(self)}
        updates = {k: _text(v).strip() for k, v in (overrides or {}).items() if k in known}
        return replace(self, **updates)

    def missing_credentials(self):
        """제출에 필요한데 비어 있는 항목 목록"""
        required = ['app_id', 'app_secret', 'app_token', 'project_table_id']
        return [name for name in required if not getattr(self, name)]

    def to_dict(self):
        return asdict(self)


@dataclass
class ProjectDetails:
    """프로젝트 기본 정보"""
    project_type: str = "In-House"
    project_name: str = ""
    product_id: str = ""
    training_name: str = ""
    batch_no: str = ""
    trainee_dept: str = ""
    cs_id: str = ""
    project_status: str = "WIP"
    invitation: str = ""       # 자유 메모

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        return cls(**{k: _text(v) for k, v in (data or {}).items() if k in known})

    def to_dict(self):
        return asdict(self)


@dataclass
class ScheduleDay:
    """단일 일정 (하루)"""
    date: str = ""                      # "2025-09-16"
    start_time: str = DEFAULT_START_TIME
    end_time: str = DEFAULT_END_TIME
    sales_amount: str = ""              # 입력값 그대로 (숫자 변환은 매핑 단계)
    expected_payment_date: str = ""
    payment_status: str = "Pending"

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        return cls(**{k: _text(v) for k, v in (data or {}).items() if k in known})

    def to_dict(self):
        return asdict(self)


@dataclass
class FormState:
    """등록 폼 전체 상태"""
    project: ProjectDetails = field(default_factory=ProjectDetails)
    days: List[ScheduleDay] = field(default_factory=lambda: [ScheduleDay()])

    @classmethod
    def initial(cls):
        return cls()

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError("요청 데이터는 JSON 객체여야 합니다.")
        if not isinstance(data.get('project') or {}, dict):
            raise ValueError("project 값은 객체여야 합니다.")
        raw_days = data.get('days') or []
        if not isinstance(raw_days, list) or not all(isinstance(d, dict) for d in raw_days):
            raise ValueError("days 값은 객체 목록이어야 합니다.")
        days = [ScheduleDay.from_dict(d) for d in raw_days]
        return cls(
            project=ProjectDetails.from_dict(data.get('project')),
            days=days or [ScheduleDay()],
        )

    @classmethod
    def from_form(cls, form):
        """브라우저 폼 (MultiDict) → FormState. 일정 필드는 같은 이름의 목록으로 전달됨"""
        project = ProjectDetails.from_dict({
            f.name: form.get(f.name, f.default) for f in fields(ProjectDetails)
        })
        defaults = {f.name: f.default for f in fields(ScheduleDay)}
        columns = {name: form.getlist(name) for name in defaults}
        count = max(len(v) for v in columns.values())
        days = []
        for i in range(count):
            days.append(ScheduleDay.from_dict({
                name: values[i] if i < len(values) else defaults[name]
                for name, values in columns.items()
            }))
        return cls(project=project, days=days or [ScheduleDay()])

    def add_day(self):
        self.days.append(ScheduleDay())

    def remove_day(self, index):
        """첫째 날은 삭제할 수 없음"""
        if index > 0 and len(self.days) > 1 and index < len(self.days):
            del self.days[index]

    def to_dict(self):
        return {
            "project": self.project.to_dict(),
            "days": [d.to_dict() for d in self.days],
        }


@dataclass
class UserSession:
    """로그인 사용자 정보"""
    name: str = "Lark User"
    avatar_url: str = ""
    open_id: str = ""

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(
            name=data.get('name') or "Lark User",
            avatar_url=data.get('avatar_url') or "",
            open_id=data.get('open_id') or "",
        )

    def to_dict(self):
        return asdict(self)


@dataclass
class UserToken:
    """OIDC 코드 교환 결과"""
    access_token: str
    name: str = "Lark User"
    avatar_url: str = ""
    open_id: str = ""
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None

    def to_session(self):
        return UserSession(name=self.name, avatar_url=self.avatar_url, open_id=self.open_id)


@dataclass
class FieldInfo:
    """테이블 필드 (스키마)"""
    name: str
    type: int

    def to_dict(self):
        return {"name": self.name, "type": self.type}
