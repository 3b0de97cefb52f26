import json

import pytest

from models import ConnectionConfig, FormState, ProjectDetails, ScheduleDay


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeLark:
    """requests.request 대체 - 경로 끝부분으로 응답을 골라 돌려주고 호출을 기록"""

    def __init__(self):
        self.calls = []
        self.routes = []

    def add(self, method, path_suffix, *payloads):
        self.routes.append([method, path_suffix, list(payloads)])

    def __call__(self, method, url, headers=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "headers": headers or {},
                           "json": json, "timeout": timeout})
        for route_method, suffix, payloads in self.routes:
            if route_method == method and url.endswith(suffix):
                payload = payloads.pop(0) if len(payloads) > 1 else payloads[0]
                if isinstance(payload, BaseException) and not isinstance(payload, ValueError):
                    raise payload
                return FakeResponse(payload)
        raise AssertionError(f"unexpected call: {method} {url}")

    def paths(self, method=None):
        return [c["url"] for c in self.calls if method is None or c["method"] == method]


@pytest.fixture
def fake_lark(monkeypatch):
    fake = FakeLark()
    monkeypatch.setattr('services.lark_api.requests.request', fake)
    return fake


@pytest.fixture
def connection():
    return ConnectionConfig(
        app_id='cli_test',
        app_secret='secret',
        app_token='bascnAppToken',
        project_table_id='tblProject',
        schedule_table_id='tblSchedule',
    )


@pytest.fixture
def filled_form():
    return FormState(
        project=ProjectDetails(
            project_type='Public',
            project_name='Data Literacy',
            product_id='PROD-001',
            training_name='Excel Basics',
            batch_no='B2',
            trainee_dept='Finance',
            cs_id='CS-9',
            project_status='WIP',
            invitation='bring laptops',
        ),
        days=[
            ScheduleDay(date='2025-03-10', start_time='09:00', end_time='17:00',
                        sales_amount='1500.50', expected_payment_date='2025-04-01',
                        payment_status='Pending'),
            ScheduleDay(date='2025-03-11', start_time='09:30', end_time='16:00',
                        sales_amount='', payment_status='Paid'),
        ],
    )


@pytest.fixture
def app(tmp_path):
    from app import create_app
    return create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'SERVER_NAME': 'localhost',
        'LOG_DIR': str(tmp_path / 'logs'),
        'LARK_APP_ID': 'cli_test',
        'LARK_APP_SECRET': 'secret',
        'LARK_APP_TOKEN': 'bascnAppToken',
        'LARK_PROJECT_TABLE_ID': 'tblProject',
        'LARK_SCHEDULE_TABLE_ID': 'tblSchedule',
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in(client):
    with client.session_transaction() as sess:
        sess['lark_user'] = json.dumps({"name": "Somchai", "avatar_url": "", "open_id": "ou_1"})
    return client
