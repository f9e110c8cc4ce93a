import pytest

from flowhr_attendance.attendance.factory import StatusPolicyFactory
from flowhr_attendance.attendance.strategies.hours_strategy import HoursStatusPolicy
from flowhr_attendance.attendance.strategies.presence_strategy import PresenceStatusPolicy
from flowhr_attendance.core.enums import AttendanceStatus


def test_factory_defaults_to_presence():
    assert isinstance(StatusPolicyFactory().for_name(""), PresenceStatusPolicy)


def test_factory_builds_hours_policy():
    policy = StatusPolicyFactory(half_day_threshold_minutes=300).for_name(" Hours ")

    assert isinstance(policy, HoursStatusPolicy)
    assert policy.decide_check_out(current=AttendanceStatus.PRESENT, worked_minutes=299).status == (
        AttendanceStatus.HALF_DAY
    )
    assert policy.decide_check_out(current=AttendanceStatus.PRESENT, worked_minutes=300).status == (
        AttendanceStatus.PRESENT
    )


def test_presence_policy_ignores_hours():
    policy = PresenceStatusPolicy()

    assert policy.decide_check_in(current=None).status == AttendanceStatus.PRESENT
    assert policy.decide_check_out(current=AttendanceStatus.PRESENT, worked_minutes=5).status == (
        AttendanceStatus.PRESENT
    )


def test_hours_policy_keeps_non_present_status():
    policy = HoursStatusPolicy(240)

    assert policy.decide_check_out(current=AttendanceStatus.LEAVE, worked_minutes=10).status == AttendanceStatus.LEAVE


def test_factory_rejects_unknown_policy():
    with pytest.raises(ValueError):
        StatusPolicyFactory().for_name("overtime")
