"""Admin dashboard: stats, system logs."""
from datetime import datetime
from visitdesk.schemas.common import CamelModel


class DashboardStats(CamelModel):
    total_visitors_today: int
    currently_checked_in: int
    average_visit_duration: int  # minutes
    unique_visitors_today: int
    percent_change_from_avg: int
    total_registered_visitors: int
    returning_visitors: int
    returning_visitors_percentage: int
    peak_hour: int
    total_visits_all_time: int


class SystemLogEntry(CamelModel):
    id: int
    action: str
    details: str
    user_id: int | None = None
    affected_records: int
    created_at: datetime


class AnalyticsSummary(CamelModel):
    total_visits: int
    unique_visitors: int
    completed_visits: int
    active_visits: int
    average_visit_duration: int  # minutes


class AnalyticsBucket(CamelModel):
    date: str
    count: int
    active: int
    completed: int
    avg_duration: int


class HourCount(CamelModel):
    hour: str
    count: int


class DayCount(CamelModel):
    day: str
    count: int


class AnalyticsResponse(CamelModel):
    summary: AnalyticsSummary
    time_series: list[AnalyticsBucket]
    by_hour: list[HourCount]
    by_day_of_week: list[DayCount]
