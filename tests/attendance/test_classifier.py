from datetime import date, time

import pytest

from flowhr_attendance.attendance.classifier import classify_timing, shift_offset
from flowhr_attendance.attendance.model import AttendanceRecord
from flowhr_attendance.core.enums import AttendanceStatus, TimingLabel
from flowhr_attendance.schedules.model import ResolvedSchedule

DAY = ResolvedSchedule(start_time=time(9, 0), end_time=time(17, 0))
NIGHT = ResolvedSchedule(start_time=time(22, 0), end_time=time(6, 0))


def _record(in_time=None, out_time=None, status=AttendanceStatus.PRESENT):
    return AttendanceRecord(
        attendance_id=1,
        employee_id=1,
        work_date=date(2025, 1, 15),
        in_time=in_time,
        out_time=out_time,
        status=status,
    )


@pytest.mark.parametrize(
    "in_time, expected",
    [
        (time(8, 45), {TimingLabel.EARLY_CHECK_IN}),
        (time(9, 15), {TimingLabel.LATE}),
        (time(9, 0), set()),
        (time(9, 0, 1), {TimingLabel.LATE}),
    ],
)
def test_check_in_labels(in_time, expected):
    assert classify_timing(_record(in_time=in_time), DAY) == expected


def test_leaving_early_is_labelled():
    assert classify_timing(_record(time(9, 0), time(16, 30)), DAY) == {TimingLabel.EARLY_CHECK_OUT}


def test_staying_late_is_not_labelled():
    assert classify_timing(_record(time(9, 0), time(18, 30)), DAY) == set()


def test_no_schedule_means_no_labels():
    assert classify_timing(_record(time(8, 0), time(12, 0)), None) == set()


def test_no_record_means_no_labels():
    assert classify_timing(None, DAY) == set()


def test_absent_record_has_no_labels(absent_record):
    assert classify_timing(absent_record(), DAY) == set()


def test_missing_start_skips_check_in_label():
    schedule = ResolvedSchedule(start_time=None, end_time=time(17, 0), source="custom")

    assert classify_timing(_record(time(11, 0), time(16, 0)), schedule) == {TimingLabel.EARLY_CHECK_OUT}


def test_missing_end_skips_check_out_label():
    schedule = ResolvedSchedule(start_time=time(9, 0), end_time=None, source="custom")

    assert classify_timing(_record(time(9, 30), time(12, 0)), schedule) == {TimingLabel.LATE}


@pytest.mark.parametrize(
    "in_time, out_time, expected",
    [
        (time(21, 45), time(6, 0), {TimingLabel.EARLY_CHECK_IN}),
        (time(22, 30), time(6, 30), {TimingLabel.LATE}),
        (time(0, 30), time(6, 0), {TimingLabel.LATE}),
        (time(22, 0), time(5, 0), {TimingLabel.EARLY_CHECK_OUT}),
        (time(22, 0), time(23, 30), {TimingLabel.EARLY_CHECK_OUT}),
    ],
)
def test_night_window_labels(in_time, out_time, expected):
    assert classify_timing(_record(in_time, out_time), NIGHT) == expected


def test_shift_offset_on_wrapping_window():
    assert shift_offset(time(1, 0), NIGHT) == 3 * 3600
    assert shift_offset(time(21, 45), NIGHT) == -15 * 60
