from datetime import date
from typing import Dict, Iterable, List, Optional

from models.schema import DailySummary, TimeMetrics, WeeklySummary
from utils.helper import format_hours, week_range


def summary_id(user_id: str, day: date) -> str:
    return f"{user_id}_{day.isoformat()}"


def _with_daily_hours(summary: DailySummary) -> DailySummary:
    return summary.model_copy(update={
        "total_worked_hours": format_hours(summary.total_worked_minutes),
        "regular_hours": format_hours(summary.regular_minutes),
        "overtime_hours": format_hours(summary.overtime_minutes),
        "night_diff_hours": format_hours(summary.night_diff_minutes),
    })


def accumulate_daily_summary(user_id: str, day: date, metrics: TimeMetrics,
                             existing: Optional[DailySummary] = None) -> DailySummary:
    """Add one calculation into a user's summary for `day`.

    Totals are kept in minutes and the hour strings are re-derived from them.
    """
    base = existing or DailySummary(user_id=user_id, day=day)
    summary = base.model_copy(update={
        "total_worked_minutes": base.total_worked_minutes + metrics.total_worked_minutes,
        "regular_minutes": base.regular_minutes + metrics.regular_minutes,
        "overtime_minutes": base.overtime_minutes + metrics.overtime_minutes,
        "night_diff_minutes": base.night_diff_minutes + metrics.night_diff_minutes,
        "total_late_minutes": base.total_late_minutes + metrics.late_minutes,
        "total_undertime_minutes": base.total_undertime_minutes + metrics.undertime_minutes,
    })
    return _with_daily_hours(summary)


def summarize_day(user_id: str, day: date, metrics_list: Iterable[TimeMetrics]) -> DailySummary:
    summary = DailySummary(user_id=user_id, day=day)
    for metrics in metrics_list:
        summary = accumulate_daily_summary(user_id, day, metrics, summary)
    return summary


def summarize_week(summaries: Iterable[DailySummary], day: date) -> List[WeeklySummary]:
    """Roll daily summaries up into one report per user for the week of `day`.

    Summaries outside the Sunday-Saturday week are ignored. Users come back
    in the order they first appear.
    """
    week_start, week_end = week_range(day)
    weekly: Dict[str, WeeklySummary] = {}

    for s in summaries:
        if not week_start <= s.day <= week_end:
            continue
        report = weekly.get(s.user_id) or WeeklySummary(
            user_id=s.user_id, week_start=week_start, week_end=week_end)
        weekly[s.user_id] = report.model_copy(update={
            "days": report.days + 1,
            "total_worked_minutes": report.total_worked_minutes + s.total_worked_minutes,
            "regular_minutes": report.regular_minutes + s.regular_minutes,
            "overtime_minutes": report.overtime_minutes + s.overtime_minutes,
            "night_diff_minutes": report.night_diff_minutes + s.night_diff_minutes,
            "late_minutes": report.late_minutes + s.total_late_minutes,
            "undertime_minutes": report.undertime_minutes + s.total_undertime_minutes,
        })

    return [
        r.model_copy(update={
            "total_hours": format_hours(r.total_worked_minutes),
            "regular_hours": format_hours(r.regular_minutes),
            "overtime_hours": format_hours(r.overtime_minutes),
            "night_diff_hours": format_hours(r.night_diff_minutes),
        })
        for r in weekly.values()
    ]
