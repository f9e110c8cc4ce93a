"""Timing labels for an attendance record against its resolved schedule.

Pure functions: they annotate views and reports and never touch stored data.
Times are compared at second precision (HH:MM:SS).
"""

from __future__ import annotations

from datetime import time
from typing import FrozenSet, Optional

from ..common.datetime_utils import seconds_of_day
from ..core.enums import AttendanceStatus, TimingLabel
from ..schedules.model import ResolvedSchedule
from .model import AttendanceRecord

SECONDS_PER_DAY = 24 * 3600


def shift_offset(value: time, schedule: ResolvedSchedule) -> int:
    """Seconds from the window start to ``value`` on the window's own timeline.

    For a window that wraps midnight (e.g. 22:00-06:00) times before the middle
    of the off-duty gap count as the next calendar day, so 01:00 is three hours
    after a 22:00 start and 21:45 is fifteen minutes before it.
    """

    start = seconds_of_day(schedule.start_time)
    t = seconds_of_day(value)
    if not schedule.wraps_midnight:
        return t - start

    end = seconds_of_day(schedule.end_time)
    pivot = (end + start) // 2
    if t >= pivot:
        return t - start
    return t + SECONDS_PER_DAY - start


def _end_offset(schedule: ResolvedSchedule) -> int:
    return shift_offset(schedule.end_time, schedule)


def is_before_end(value: time, schedule: ResolvedSchedule) -> bool:
    """True if ``value`` falls before the scheduled end (wrap-aware)."""

    if schedule.start_time is None:
        return seconds_of_day(value) < seconds_of_day(schedule.end_time)
    return shift_offset(value, schedule) < _end_offset(schedule)


def classify_timing(
    record: Optional[AttendanceRecord], schedule: Optional[ResolvedSchedule]
) -> FrozenSet[TimingLabel]:
    if record is None or schedule is None:
        return frozenset()
    if record.status == AttendanceStatus.ABSENT:
        return frozenset()

    labels = set()

    if schedule.start_time is not None and record.in_time is not None:
        offset = shift_offset(record.in_time, schedule)
        if offset < 0:
            labels.add(TimingLabel.EARLY_CHECK_IN)
        elif offset > 0:
            labels.add(TimingLabel.LATE)

    if schedule.end_time is not None and record.out_time is not None:
        # Staying past the end is not labelled.
        if is_before_end(record.out_time, schedule):
            labels.add(TimingLabel.EARLY_CHECK_OUT)

    return frozenset(labels)
