"""
타임존 유틸리티

일일 보상 리셋 경계 계산용. 리셋 시각은 지정된 타임존의 현지 시각(예: 06:30
Europe/Berlin)이므로 고정 UTC 오프셋이 아닌 pytz 타임존 정보로 계산한다.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

import pytz


def get_utc_now() -> datetime:
    """현재 UTC 시간을 반환합니다."""
    return datetime.now(timezone.utc)


def ensure_aware(dt: datetime) -> datetime:
    """naive datetime은 UTC로 간주합니다 (SQLite 등 tz 정보를 잃는 드라이버 대응)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def local_today(tz_name: str, now: Optional[datetime] = None) -> date:
    """지정 타임존 기준 오늘 날짜"""
    if now is None:
        now = get_utc_now()
    return ensure_aware(now).astimezone(pytz.timezone(tz_name)).date()


def _localize(day: date, at: time, tz_name: str) -> datetime:
    # pytz 는 tzinfo= 대신 localize() 로 해당 날짜의 오프셋(CET/CEST)을 적용해야 함
    return pytz.timezone(tz_name).localize(datetime.combine(day, at))


def get_last_reset(now: datetime, tz_name: str, hour: int, minute: int) -> datetime:
    """
    현재 시점 기준 가장 최근의 리셋 경계를 반환합니다.

    오늘의 리셋 시각이 아직 오지 않았다면 어제의 리셋 시각이 경계가 됩니다.
    반환값은 해당 타임존의 aware datetime 입니다.
    """
    local_now = ensure_aware(now).astimezone(pytz.timezone(tz_name))
    reset_time = time(hour=hour, minute=minute)

    boundary = _localize(local_now.date(), reset_time, tz_name)
    if local_now < boundary:
        boundary = _localize(local_now.date() - timedelta(days=1), reset_time, tz_name)
    return boundary


def get_next_reset(last_reset: datetime, tz_name: str) -> datetime:
    """다음 리셋 경계 (달력 기준 +1일, 같은 현지 시각)"""
    return _localize(
        last_reset.date() + timedelta(days=1),
        last_reset.time(),
        tz_name,
    )


def time_until(target: datetime, now: datetime) -> timedelta:
    return target.astimezone(timezone.utc) - ensure_aware(now).astimezone(timezone.utc)


def format_remaining(delta: timedelta) -> str:
    """남은 시간을 'Xh Ym' 형식으로 (내림)"""
    total_seconds = max(int(delta.total_seconds()), 0)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    return f"{hours}h {minutes}m"
