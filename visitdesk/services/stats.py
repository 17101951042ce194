"""Dashboard statistics and visit export rows."""
from collections import Counter
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from visitdesk.models.visitor import Visit, Visitor


def _minutes_between(start: datetime, end: datetime) -> int:
    return round((end - start).total_seconds() / 60)


def compute_stats(db: Session, now: datetime | None = None) -> dict:
    now = now or datetime.now()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_ago = today - timedelta(days=7)

    visits = db.query(Visit).all()
    active = [v for v in visits if v.active]
    completed = [v for v in visits if not v.active]
    registered = db.query(Visitor).filter(Visitor.deleted.is_(False)).count()

    today_visits = [v for v in visits if v.check_in_time >= today]
    last_week_visits = [v for v in visits if week_ago <= v.check_in_time < today]

    durations = [
        (v.check_out_time - v.check_in_time).total_seconds()
        for v in completed
        if v.check_out_time
    ]
    avg_minutes = round(sum(durations) / len(durations) / 60) if durations else 0

    hour_counts = Counter(v.check_in_time.hour for v in completed)
    # Earliest hour wins ties, 0 when there is no history
    peak_hour = max(range(24), key=lambda h: (hour_counts.get(h, 0), -h))

    avg_daily_last_week = len(last_week_visits) / 7
    percent_change = (
        round((len(today_visits) / avg_daily_last_week - 1) * 100) if avg_daily_last_week > 0 else 0
    )

    per_visitor = Counter(v.visitor_id for v in completed)
    returning = sum(1 for n in per_visitor.values() if n > 1)

    return {
        "total_visitors_today": len(today_visits),
        "currently_checked_in": len(active),
        "average_visit_duration": avg_minutes,
        "unique_visitors_today": len({v.visitor_id for v in today_visits}),
        "percent_change_from_avg": percent_change,
        "total_registered_visitors": registered,
        "returning_visitors": returning,
        "returning_visitors_percentage": round(returning / registered * 100) if registered else 0,
        "peak_hour": peak_hour,
        "total_visits_all_time": len(visits),
    }


EXPORT_COLUMNS = [
    "VisitorName",
    "BadgeId",
    "Email",
    "Phone",
    "YearOfBirth",
    "Purpose",
    "CheckInTime",
    "CheckOutTime",
    "VisitStatus",
    "VisitDuration",
]


def export_rows(db: Session, start: datetime, end: datetime) -> list[dict]:
    rows = (
        db.query(Visit, Visitor)
        .join(Visitor, Visitor.id == Visit.visitor_id)
        .filter(Visit.check_in_time >= start, Visit.check_in_time <= end)
        .order_by(Visit.check_in_time.desc())
        .all()
    )
    out = []
    for visit, visitor in rows:
        out.append({
            "VisitorName": visitor.full_name,
            "BadgeId": visitor.badge_id,
            "Email": visitor.email or "",
            "Phone": visitor.phone_number,
            "YearOfBirth": visitor.year_of_birth,
            "Purpose": visit.purpose or "",
            "CheckInTime": visit.check_in_time.isoformat(),
            "CheckOutTime": visit.check_out_time.isoformat() if visit.check_out_time else "",
            "VisitStatus": "Active" if visit.active else "Completed",
            "VisitDuration": _minutes_between(visit.check_in_time, visit.check_out_time) if visit.check_out_time else "",
        })
    return out


ANALYTICS_INTERVALS = ("hour", "day", "week", "month")
DAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def _interval_key(moment: datetime, interval: str) -> str:
    if interval == "hour":
        return moment.strftime("%Y-%m-%d %H:00")
    if interval == "week":
        year, week, _ = moment.isocalendar()
        return f"{year}-W{week:02d}"
    if interval == "month":
        return moment.strftime("%Y-%m")
    return moment.strftime("%Y-%m-%d")


def _average_minutes(visits: list[Visit]) -> int:
    durations = [
        (v.check_out_time - v.check_in_time).total_seconds()
        for v in visits
        if v.check_out_time
    ]
    return round(sum(durations) / len(durations) / 60) if durations else 0


def compute_analytics(db: Session, start: datetime, end: datetime, interval: str = "day") -> dict:
    """Visits checked in within [start, end]: summary, time series per interval, hour and weekday histograms."""
    visits = (
        db.query(Visit)
        .filter(Visit.check_in_time >= start, Visit.check_in_time <= end)
        .order_by(Visit.check_in_time)
        .all()
    )

    buckets: dict[str, list[Visit]] = {}
    by_hour = [0] * 24
    by_day = [0] * 7
    for visit in visits:
        buckets.setdefault(_interval_key(visit.check_in_time, interval), []).append(visit)
        by_hour[visit.check_in_time.hour] += 1
        # Sunday first; datetime.weekday() starts on Monday
        by_day[(visit.check_in_time.weekday() + 1) % 7] += 1

    time_series = [
        {
            "date": key,
            "count": len(bucket),
            "active": sum(1 for v in bucket if v.active),
            "completed": sum(1 for v in bucket if not v.active),
            "avg_duration": _average_minutes(bucket),
        }
        for key, bucket in sorted(buckets.items())
    ]

    return {
        "summary": {
            "total_visits": len(visits),
            "unique_visitors": len({v.visitor_id for v in visits}),
            "completed_visits": sum(1 for v in visits if not v.active),
            "active_visits": sum(1 for v in visits if v.active),
            "average_visit_duration": _average_minutes(visits),
        },
        "time_series": time_series,
        "by_hour": [{"hour": f"{hour:02d}", "count": n} for hour, n in enumerate(by_hour)],
        "by_day_of_week": [{"day": DAY_LABELS[i], "count": n} for i, n in enumerate(by_day)],
    }
