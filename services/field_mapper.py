"""
폼 상태 → Lark Base 필드 매핑
"""
import math
from datetime import datetime, timezone

# 일정 테이블의 단일 선택 옵션 이름
PAYMENT_STATUS_OPTIONS = {
    'Pending': 'รอชำระเงิน',
    'Paid': 'ชำระแล้ว',
}

# 브라우저 time 입력은 초 단위를 붙여 보낼 수 있음
TIME_FORMATS = ('%Y-%m-%dT%H:%M', '%Y-%m-%dT%H:%M:%S')


def map_project_fields(project):
    """프로젝트 정보 → 프로젝트 테이블 필드"""
    return {
        "ProjectType": project.project_type,
        "ProjectName": project.project_name,
        "Product ID": project.product_id,
        "Training Name": project.training_name,
        "Batch No": project.batch_no,
        "Trainee Dept": project.trainee_dept,
        "CS ID": project.cs_id,
        "Project Status": project.project_status,
        "Invitation": project.invitation,
    }


def to_timestamp(date_str, time_str):
    """날짜 + 시각 (로컬 시간) → 밀리초 timestamp. 값이 없거나 잘못되면 None"""
    if not date_str or not time_str:
        return None
    value = f"{date_str.strip()}T{time_str.strip()}"
    for fmt in TIME_FORMATS:
        try:
            return int(datetime.strptime(value, fmt).timestamp() * 1000)
        except ValueError:
            continue
        except (OverflowError, OSError):
            return None
    return None


def to_date_timestamp(date_str):
    """날짜만 있는 값은 UTC 자정 기준 밀리초 timestamp"""
    if not date_str:
        return None
    try:
        dt = datetime.strptime(date_str.strip(), '%Y-%m-%d')
        return int(dt.replace(tzinfo=timezone.utc).timestamp() * 1000)
    except (ValueError, OverflowError):
        return None


def to_amount(value):
    """판매 금액 입력값 → float (빈 값/잘못된 값은 0)"""
    try:
        amount = float(str(value or 0).replace(',', '').strip() or 0)
    except ValueError:
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def map_schedule_fields(day, index, project_record_id):
    """일정 하루 → 일정 테이블 필드 (index는 0부터)"""
    return {
        "DayNo": index + 1,
        "ID": [project_record_id],          # 프로젝트 테이블 Link 필드
        "TimeStart": to_timestamp(day.date, day.start_time),
        "TimeEnd": to_timestamp(day.date, day.end_time),
        "Sales Amount": to_amount(day.sales_amount),
        "Expected Payment Date": to_date_timestamp(day.expected_payment_date),
        "Payment Status": PAYMENT_STATUS_OPTIONS.get(day.payment_status, day.payment_status),
    }
