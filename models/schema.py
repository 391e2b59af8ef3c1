from datetime import date, datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PunchStatus = Literal["regular", "OT", "ND", "late", "undertime"]


class WireModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(populate_by_name=True)


class Schedule(WireModel):
    start: Optional[str] = None
    end: Optional[str] = None
    timezone: Optional[str] = None


class PunchPair(WireModel):
    # Punch values are checked by the calculator so a bad record becomes a
    # calculationError entry instead of a 422
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    punch_in: Any = Field(default=None, alias="punchIn")
    punch_out: Any = Field(default=None, alias="punchOut")


class TimeMetrics(WireModel):
    total_worked_hours: str = Field(alias="totalWorkedHours")
    total_worked_minutes: int = Field(alias="totalWorkedMinutes")
    regular_hours: str = Field(alias="regularHours")
    regular_minutes: int = Field(alias="regularMinutes")
    overtime_hours: str = Field(alias="overtimeHours")
    overtime_minutes: int = Field(alias="overtimeMinutes")
    night_diff_hours: str = Field(alias="nightDiffHours")
    night_diff_minutes: int = Field(alias="nightDiffMinutes")
    late_minutes: int = Field(alias="lateMinutes")
    undertime_minutes: int = Field(alias="undertimeMinutes")
    punch_in_time: datetime = Field(alias="punchInTime")
    punch_out_time: datetime = Field(alias="punchOutTime")
    shift_start: datetime = Field(alias="shiftStart")
    shift_end: datetime = Field(alias="shiftEnd")


class BatchResult(PunchPair):
    metrics: Optional[TimeMetrics] = None
    calculation_error: Optional[str] = Field(default=None, alias="calculationError")


class DailySummary(WireModel):
    user_id: str = Field(alias="userId")
    day: date = Field(alias="date")
    total_worked_minutes: int = Field(default=0, alias="totalWorkedMinutes")
    regular_minutes: int = Field(default=0, alias="regularMinutes")
    overtime_minutes: int = Field(default=0, alias="overtimeMinutes")
    night_diff_minutes: int = Field(default=0, alias="nightDiffMinutes")
    total_late_minutes: int = Field(default=0, alias="totalLateMinutes")
    total_undertime_minutes: int = Field(default=0, alias="totalUndertimeMinutes")
    total_worked_hours: str = Field(default="0.00", alias="totalWorkedHours")
    regular_hours: str = Field(default="0.00", alias="regularHours")
    overtime_hours: str = Field(default="0.00", alias="overtimeHours")
    night_diff_hours: str = Field(default="0.00", alias="nightDiffHours")


class WeeklySummary(WireModel):
    user_id: str = Field(alias="userId")
    week_start: date = Field(alias="weekStart")
    week_end: date = Field(alias="weekEnd")
    days: int = 0
    total_worked_minutes: int = Field(default=0, alias="totalWorkedMinutes")
    regular_minutes: int = Field(default=0, alias="regularMinutes")
    overtime_minutes: int = Field(default=0, alias="overtimeMinutes")
    night_diff_minutes: int = Field(default=0, alias="nightDiffMinutes")
    late_minutes: int = Field(default=0, alias="lateMinutes")
    undertime_minutes: int = Field(default=0, alias="undertimeMinutes")
    total_hours: str = Field(default="0.00", alias="totalHours")
    regular_hours: str = Field(default="0.00", alias="regularHours")
    overtime_hours: str = Field(default="0.00", alias="overtimeHours")
    night_diff_hours: str = Field(default="0.00", alias="nightDiffHours")


class TimeCalculationRequest(WireModel):
    punch_in: Any = Field(default=None, alias="punchIn")
    punch_out: Any = Field(default=None, alias="punchOut")
    schedule: Optional[Schedule] = None


class BatchTimeCalculationRequest(WireModel):
    attendance_records: List[Any] = Field(alias="attendanceRecords")
    schedule: Optional[Schedule] = None


class DailySummaryRequest(WireModel):
    user_id: str = Field(alias="userId")
    day: date = Field(alias="date")
    records: List[Any]
    schedule: Optional[Schedule] = None


class TimeCalculationResponse(WireModel):
    success: bool = True
    data: TimeMetrics


class BatchTimeCalculationResponse(WireModel):
    success: bool = True
    data: List[BatchResult]


class DailySummaryResponse(WireModel):
    success: bool = True
    data: DailySummary
    errors: List[str] = []


class WeeklySummaryRequest(WireModel):
    day: date = Field(alias="date")
    summaries: List[DailySummary]


class WeeklySummaryResponse(WireModel):
    success: bool = True
    data: List[WeeklySummary]
