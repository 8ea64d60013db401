# utils/rsvp_metrics.py
"""
Dashboard numbers derived from a snapshot of RSVP resources.

Records are the JSON shape served by ``/api/rsvp`` (camelCase keys,
``createdAt`` as an ISO string) and are expected newest-first.
"""
import math
from dataclasses import dataclass
from datetime import datetime, date, timezone
from typing import Optional

ATTENDING = 'attending'
NOT_ATTENDING = 'not_attending'


@dataclass
class RsvpMetrics:
    total: int = 0
    attending: int = 0
    not_attending: int = 0
    attending_rate: int = 0
    not_attending_rate: int = 0
    total_guests: int = 0
    avg_confirmed_guests: float = 0
    latest_submission: Optional[dict] = None
    busiest_day: Optional[str] = None

    def to_dict(self):
        return {
            'total': self.total,
            'attending': self.attending,
            'notAttending': self.not_attending,
            'attendingRate': self.attending_rate,
            'notAttendingRate': self.not_attending_rate,
            'totalGuests': self.total_guests,
            'avgConfirmedGuests': self.avg_confirmed_guests,
            'latestSubmission': self.latest_submission,
            'busiestDay': self.busiest_day,
        }


@dataclass
class DayBucket:
    date: str  # YYYY-MM-DD (UTC)
    label: str
    attending_count: int
    not_attending_count: int
    total: int
    attending_ratio: int

    def to_dict(self):
        return {
            'date': self.date,
            'label': self.label,
            'attendingCount': self.attending_count,
            'notAttendingCount': self.not_attending_count,
            'total': self.total,
            'attendingRatio': self.attending_ratio,
        }


def percent(part, whole):
    """Integer percentage rounded half up; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))


def day_key(value):
    """UTC calendar day of a timestamp as ``YYYY-MM-DD``, or None if unparseable."""
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str) and value:
        try:
            moment = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return None
    else:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).date().isoformat()


def long_day_label(key):
    day = date.fromisoformat(key)
    return f"{day:%A}, {day.day} {day:%B}"


def short_day_label(key):
    day = date.fromisoformat(key)
    return f"{day:%a}, {day.day} {day:%b}"


def _is_attending(record):
    return record.get('attendance') == ATTENDING


def _guest_count(record):
    return record.get('guestCount') or 0


def summarize(records):
    total = len(records)
    attending_records = [r for r in records if _is_attending(r)]
    attending = len(attending_records)
    not_attending = total - attending
    confirmed_guests = sum(_guest_count(r) for r in attending_records)

    per_day = {}
    for record in records:
        key = day_key(record.get('createdAt'))
        if key:
            per_day[key] = per_day.get(key, 0) + 1

    busiest_day = None
    if per_day:
        # highest count wins, ties go to the earliest day
        key = min(per_day, key=lambda k: (-per_day[k], k))
        busiest_day = long_day_label(key)

    return RsvpMetrics(
        total=total,
        attending=attending,
        not_attending=not_attending,
        attending_rate=percent(attending, total),
        not_attending_rate=percent(not_attending, total),
        total_guests=sum(_guest_count(r) for r in records),
        avg_confirmed_guests=confirmed_guests / attending if attending else 0,
        latest_submission=records[0] if records else None,
        busiest_day=busiest_day,
    )


def build_timeline(records):
    per_day = {}
    for record in records:
        key = day_key(record.get('createdAt'))
        if not key:
            continue
        counts = per_day.setdefault(key, [0, 0])
        if _is_attending(record):
            counts[0] += 1
        else:
            counts[1] += 1

    timeline = []
    for key in sorted(per_day):
        attending, not_attending = per_day[key]
        total = attending + not_attending
        timeline.append(DayBucket(
            date=key,
            label=short_day_label(key),
            attending_count=attending,
            not_attending_count=not_attending,
            total=total,
            attending_ratio=percent(attending, total),
        ))
    return timeline


def filter_entries(records, status=None, query=''):
    """Status filter plus case-insensitive search over name and message."""
    needle = (query or '').strip().lower()
    result = []
    for record in records:
        if status in (ATTENDING, NOT_ATTENDING) and record.get('attendance') != status:
            continue
        if needle and needle not in (record.get('name') or '').lower() \
                and needle not in (record.get('message') or '').lower():
            continue
        result.append(record)
    return result
