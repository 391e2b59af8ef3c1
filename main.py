import logging
from collections.abc import Mapping
from datetime import datetime, time, timedelta
from typing import Any, Iterable, List, Tuple, Union
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from config import NIGHT_DIFF_END_HOUR, NIGHT_DIFF_START_HOUR
from models.schema import BatchResult, PunchPair, PunchStatus, Schedule, TimeMetrics
from utils.helper import (
    InvalidInputError,
    ceil_minutes,
    format_hours,
    local_datetime,
    minutes_between,
    parse_clock_time,
    parse_instant,
    resolve_timezone,
)

ScheduleLike = Union[Schedule, Mapping, None]


def coerce_schedule(schedule: ScheduleLike) -> Tuple[time, time, ZoneInfo]:
    if schedule is None:
        raise InvalidInputError("schedule with start and end times is required")
    if isinstance(schedule, Mapping):
        try:
            schedule = Schedule(**schedule)
        except ValidationError as e:
            raise InvalidInputError(f"invalid schedule: {e.errors()[0]['msg']}") from None
    start = parse_clock_time(schedule.start, "start")
    end = parse_clock_time(schedule.end, "end")
    return start, end, resolve_timezone(schedule.timezone)


def as_punch_pair(record: Any) -> PunchPair:
    if isinstance(record, PunchPair):
        return record
    if not isinstance(record, Mapping):
        raise InvalidInputError(f"attendance record must be an object, got {type(record).__name__}")
    try:
        return PunchPair(**record)
    except ValidationError as e:
        raise InvalidInputError(f"invalid attendance record: {e.errors()[0]['msg']}") from None


def get_shift_window(punch_in: datetime, start: time, end: time, zone: ZoneInfo) -> Tuple[datetime, datetime]:
    """Anchor the shift to the punch-in's calendar day as seen in `zone`."""
    day = punch_in.astimezone(zone).date()
    return local_datetime(day, start, zone), local_datetime(day, end, zone)


def calculate_late(punch_in: datetime, shift_start: datetime) -> int:
    if punch_in <= shift_start:
        return 0
    return minutes_between(shift_start, punch_in)


def calculate_undertime(punch_out: datetime, shift_end: datetime) -> int:
    if punch_out >= shift_end:
        return 0
    return minutes_between(punch_out, shift_end)


def calculate_regular(punch_in: datetime, punch_out: datetime, shift_start: datetime,
                      shift_end: datetime, scheduled_minutes: int) -> int:
    effective_start = max(punch_in, shift_start)
    effective_end = min(punch_out, shift_end)
    if effective_end <= effective_start:
        return 0
    return max(0, min(minutes_between(effective_start, effective_end), scheduled_minutes))


def calculate_overtime(punch_in: datetime, punch_out: datetime, shift_end: datetime) -> int:
    # Only time worked after the shift end counts; early arrival is not credited
    overtime_start = max(punch_in, shift_end)
    if punch_out <= overtime_start:
        return 0
    return minutes_between(overtime_start, punch_out)


def night_windows(punch_in: datetime, punch_out: datetime, zone: ZoneInfo) -> Iterable[Tuple[datetime, datetime]]:
    """Yield each local night window touching the punch.

    With the default hours a window runs 22:00 to 06:00 the next day; a start
    hour before the end hour gives a window inside a single day.
    """
    day = punch_in.astimezone(zone).date() - timedelta(days=1)
    last_day = punch_out.astimezone(zone).date()
    start_clock = time(NIGHT_DIFF_START_HOUR)
    end_clock = time(NIGHT_DIFF_END_HOUR)
    wraps = NIGHT_DIFF_START_HOUR >= NIGHT_DIFF_END_HOUR
    while day <= last_day:
        end_day = day + timedelta(days=1) if wraps else day
        yield local_datetime(day, start_clock, zone), local_datetime(end_day, end_clock, zone)
        day += timedelta(days=1)


def calculate_night_differential(punch_in: datetime, punch_out: datetime, zone: ZoneInfo) -> int:
    """Count minute marks punch_in + k min (before punch_out) that land in a night window."""
    samples = ceil_minutes(punch_out - punch_in)
    if samples <= 0:
        return 0

    night_minutes = 0
    for window_start, window_end in night_windows(punch_in, punch_out, zone):
        first = max(0, ceil_minutes(window_start - punch_in))
        stop = min(samples, ceil_minutes(window_end - punch_in))
        if stop > first:
            night_minutes += stop - first
    return night_minutes


def calculate_time_metrics(punch_in, punch_out, schedule: ScheduleLike) -> TimeMetrics:
    punch_in = parse_instant(punch_in, "punchIn")
    punch_out = parse_instant(punch_out, "punchOut")
    start, end, zone = coerce_schedule(schedule)

    try:
        shift_start, shift_end = get_shift_window(punch_in, start, end, zone)
        night_diff = calculate_night_differential(punch_in, punch_out, zone)
    except OverflowError:
        # local days next to datetime.min / datetime.max cannot be built
        raise InvalidInputError("punch times are outside the supported date range") from None

    late_minutes = calculate_late(punch_in, shift_start)
    undertime_minutes = calculate_undertime(punch_out, shift_end)
    total_worked = minutes_between(punch_in, punch_out)
    scheduled_minutes = minutes_between(shift_start, shift_end)
    regular = calculate_regular(punch_in, punch_out, shift_start, shift_end, scheduled_minutes)
    overtime = calculate_overtime(punch_in, punch_out, shift_end)

    return TimeMetrics(
        total_worked_hours=format_hours(total_worked),
        total_worked_minutes=total_worked,
        regular_hours=format_hours(regular),
        regular_minutes=regular,
        overtime_hours=format_hours(overtime),
        overtime_minutes=overtime,
        night_diff_hours=format_hours(night_diff),
        night_diff_minutes=night_diff,
        late_minutes=late_minutes,
        undertime_minutes=undertime_minutes,
        punch_in_time=punch_in,
        punch_out_time=punch_out,
        shift_start=shift_start,
        shift_end=shift_end,
    )


def batch_calculate_time_metrics(records: Iterable[Any],
                                 schedule: ScheduleLike) -> List[BatchResult]:
    # Schedule errors are not per-record
    coerce_schedule(schedule)

    results = []
    for index, record in enumerate(records):
        echoed = {}
        try:
            pair = as_punch_pair(record)
            echoed = pair.model_dump(by_alias=True)
            metrics = calculate_time_metrics(pair.punch_in, pair.punch_out, schedule)
        except InvalidInputError as e:
            logging.warning(f"Skipping attendance record {index}: {e}")
            results.append(BatchResult.model_validate({**echoed, "metrics": None, "calculationError": str(e)}))
            continue
        results.append(BatchResult.model_validate({**echoed, "metrics": metrics, "calculationError": None}))
    return results


def determine_punch_status(metrics: TimeMetrics) -> PunchStatus:
    if metrics.overtime_minutes > 0:
        return "OT"
    if metrics.night_diff_minutes > 0:
        return "ND"
    if metrics.late_minutes > 0:
        return "late"
    if metrics.undertime_minutes > 0:
        return "undertime"
    return "regular"
