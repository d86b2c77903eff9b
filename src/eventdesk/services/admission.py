"""Admission policy: whether a project accepts registrations right now"""

import enum
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from eventdesk.config import config
from eventdesk.models.project_config import PolicyConfig, ScheduleConfig


class AdmissionState(str, enum.Enum):
    CLOSED = "closed"
    NOT_STARTED = "not_started"
    ENDED = "ended"
    FULL = "full"
    OPEN = "open"


ADMISSION_MESSAGES = {
    AdmissionState.CLOSED: "Registration is closed.",
    AdmissionState.NOT_STARTED: "Registration has not started yet.",
    AdmissionState.ENDED: "Registration has ended.",
    AdmissionState.FULL: "Registration is full.",
    AdmissionState.OPEN: "Registration is open.",
}


def schedule_time_zone() -> ZoneInfo:
    """Time zone applied to schedule timestamps stored without an offset"""
    try:
        return ZoneInfo(config.get("time_zone") or "UTC")
    except ZoneInfoNotFoundError:
        return ZoneInfo("UTC")


def _aware(value: datetime, tz) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value


def evaluate_admission(
    now: datetime,
    schedule: Optional[ScheduleConfig],
    policy: Optional[PolicyConfig],
    count: int,
    enabled: bool,
    tz=None,
) -> AdmissionState:
    """Classify registration availability. First match wins:

    1. form disabled                          -> closed
    2. now before applicationStart            -> not_started
    3. now after applicationEnd               -> ended
    4. maxParticipants > 0 and count >= it    -> full
    5. otherwise                              -> open

    Pure function of its inputs. Naive timestamps (including ``now``) are
    read in ``tz``, defaulting to the configured schedule time zone.
    """
    if not enabled:
        return AdmissionState.CLOSED

    tz = tz or schedule_time_zone()
    now = _aware(now, tz)
    schedule = schedule or ScheduleConfig()
    policy = policy or PolicyConfig()

    if schedule.application_start and now < _aware(schedule.application_start, tz):
        return AdmissionState.NOT_STARTED
    if schedule.application_end and now > _aware(schedule.application_end, tz):
        return AdmissionState.ENDED
    if policy.capacity_limited and count >= policy.max_participants:
        return AdmissionState.FULL
    return AdmissionState.OPEN


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
