"""
Project Registration - 라우트 정의
"""
import logging
from flask import (
    Blueprint, current_app, flash, jsonify, redirect, render_template,
    request, session, url_for,
)

from models import FormState, PAYMENT_STATUSES, PROJECT_STATUSES, PROJECT_TYPES
from services.session_store import SessionStore
from utils.error_handlers import error_message, handle_errors, status_for
from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)
api_bp = Blueprint('api', __name__, url_prefix='/api')

PLACEHOLDER_APP_ID = 'cli_EXAMPLE'


def _store():
    session.permanent = True
    return SessionStore(session)


def _connection_config(store):
    """환경 변수 기본값 위에 사용자가 저장한 설정을 덮어씀 (요청마다 새로 읽음)"""
    return store.load_config(current_app.config['LARK_DEFAULTS'])


def _render_form(form, config, user):
    from services.field_mapper import PAYMENT_STATUS_OPTIONS
    return render_template(
        'form.html', form=form, connection=config, user=user,
        project_types=PROJECT_TYPES, project_statuses=PROJECT_STATUSES,
        payment_statuses=PAYMENT_STATUSES, payment_labels=PAYMENT_STATUS_OPTIONS,
    )


# ===== 페이지 라우트 =====

@main_bp.route('/')
def index():
    store = _store()
    user = store.load_user()
    if not user:
        return render_template('login.html')
    return _render_form(FormState.initial(), _connection_config(store), user)


@main_bp.route('/login')
def login():
    """Lark 로그인 페이지로 이동"""
    from services.lark_auth_service import get_authorization_url

    store = _store()
    config = _connection_config(store)
    if not config.app_id or PLACEHOLDER_APP_ID in config.app_id:
        flash("App ID가 설정되지 않았습니다. .env 파일 또는 연결 설정을 확인해주세요.", 'error')
        return redirect(url_for('main.settings'))

    state = store.issue_oauth_state()
    redirect_uri = url_for('main.auth_callback', _external=True)
    return redirect(get_authorization_url(config.app_id, redirect_uri, state))


@main_bp.route('/auth/callback')
def auth_callback():
    """인증 코드 교환 후 세션 저장"""
    from requests import RequestException
    from services.lark_auth_service import (
        exchange_code_for_user_token, get_user_info, verify_oauth_state,
    )
    from utils.errors import AuthError

    store = _store()
    config = _connection_config(store)
    code = request.args.get('code', '')
    if not code:
        flash("인증 코드가 없습니다. 다시 로그인해주세요.", 'error')
        return redirect(url_for('main.index'))
    if not config.app_id or not config.app_secret:
        logger.warning("콜백 처리 중 App ID/Secret이 비어 있음")

    try:
        verify_oauth_state(store.pop_oauth_state(), request.args.get('state'))
        token = exchange_code_for_user_token(code, config.app_id, config.app_secret)
        if not token.open_id:
            # 교환 응답에 사용자 정보가 없으면 user_info로 보충
            info = get_user_info(token.access_token)
            token.name = info.get('name') or token.name
            token.avatar_url = info.get('avatar_url') or token.avatar_url
            token.open_id = info.get('open_id') or ''
    except (AuthError, RequestException) as e:
        logger.warning(f"로그인 실패: {e}")
        flash(f"Login Failed: {e}", 'error')
        return redirect(url_for('main.index'))

    store.save_user(token.to_session())
    return redirect(url_for('main.index'))


@main_bp.route('/logout', methods=['POST'])
def logout():
    _store().logout()
    return redirect(url_for('main.index'))


@main_bp.route('/settings', methods=['GET', 'POST'])
def settings():
    """연결 설정 보기/저장"""
    store = _store()
    config = _connection_config(store)
    if request.method == 'POST':
        config = config.merged(request.form.to_dict())
        store.save_config(config)
        flash("연결 설정이 저장되었습니다.", 'success')
        return redirect(url_for('main.index'))
    return render_template('settings.html', connection=config)


@main_bp.route('/submit', methods=['POST'])
def submit():
    """폼 제출 (일정 추가/삭제 버튼도 같은 폼으로 처리)"""
    from services.submission_service import SubmissionOrchestrator

    store = _store()
    user = store.load_user()
    if not user:
        return redirect(url_for('main.index'))

    config = _connection_config(store)
    form = FormState.from_form(request.form)
    action = request.form.get('action', 'submit')

    if action == 'add_day':
        form.add_day()
        return _render_form(form, config, user)
    if action.startswith('remove_day:'):
        try:
            form.remove_day(int(action.split(':', 1)[1]))
        except ValueError:
            pass
        return _render_form(form, config, user)

    orchestrator = SubmissionOrchestrator(config, form)
    result = orchestrator.submit(
        confirm_without_schedule=lambda: request.form.get('confirm_without_schedule') == '1')

    if result.succeeded:
        flash(f'Project "{form.project.project_name}" Created Successfully!', 'success')
    elif result.cancelled:
        flash("제출이 취소되었습니다.", 'info')
    else:
        where = f" (Day {result.failed_day})" if result.failed_day else ""
        flash(f"Submission Failed{where}: {result.error}", 'error')
    return _render_form(orchestrator.form, config, user)


# ===== API 라우트 =====

@api_bp.route('/submissions', methods=['POST'])
@handle_errors
def create_submission():
    """JSON 제출 {"project": {...}, "days": [...], "confirm_without_schedule": bool}"""
    from services.submission_service import SubmissionOrchestrator

    store = _store()
    if not store.load_user():
        return jsonify({"success": False, "error": "로그인이 필요합니다."}), 401

    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({"success": False, "error": "요청 데이터가 없습니다."}), 400

    orchestrator = SubmissionOrchestrator(_connection_config(store), FormState.from_dict(data))
    result = orchestrator.submit(
        confirm_without_schedule=lambda: bool(data.get('confirm_without_schedule')))

    body = result.to_dict()
    body["form"] = orchestrator.form.to_dict()
    if result.error:
        # 이미 생성된 레코드 ID와 실패한 일차를 함께 돌려줌
        body["error"] = error_message(result.error)
        if isinstance(result.error, ConfigurationError):
            body["missing"] = result.error.missing
        return jsonify(body), status_for(result.error)
    if result.cancelled:
        body["error"] = "일정 테이블 ID가 없어 제출을 취소했습니다."
        return jsonify(body), 409
    return jsonify(body)


@api_bp.route('/fields', methods=['GET'])
@handle_errors
def get_fields():
    """테이블 필드 목록 (필드 이름 확인용)"""
    from services.bitable_service import list_fields
    from services.lark_auth_service import get_tenant_access_token

    store = _store()
    if not store.load_user():
        return jsonify({"success": False, "error": "로그인이 필요합니다."}), 401

    config = _connection_config(store)
    table = request.args.get('table', 'project')
    if table not in ('project', 'schedule'):
        raise ValueError("table 값은 project 또는 schedule 이어야 합니다.")
    table_id = config.project_table_id if table == 'project' else config.schedule_table_id

    missing = [name for name in ('app_id', 'app_secret', 'app_token') if not getattr(config, name)]
    if not table_id:
        missing.append(f"{table}_table_id")
    if missing:
        raise ConfigurationError(f"Lark 연결 설정이 없습니다: {', '.join(missing)}", missing=missing)

    token = get_tenant_access_token(config.app_id, config.app_secret)
    fields = list_fields(token, config.app_token, table_id)
    logger.info(f"필드 조회: {table} ({len(fields)}개)")
    return jsonify({"success": True, "table": table, "fields": [f.to_dict() for f in fields]})

