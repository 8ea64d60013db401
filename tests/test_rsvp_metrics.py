from datetime import datetime, timezone

from utils.rsvp_metrics import (
    build_timeline,
    day_key,
    filter_entries,
    percent,
    summarize,
)


def rsvp(name, attendance, guest_count, created_at, message=""):
    return {
        "id": name.lower(),
        "name": name,
        "message": message,
        "attendance": attendance,
        "guestCount": guest_count,
        "channel": "website",
        "createdAt": created_at,
        "updatedAt": created_at,
    }


def test_summarize_empty():
    assert summarize([]).to_dict() == {
        "total": 0,
        "attending": 0,
        "notAttending": 0,
        "attendingRate": 0,
        "notAttendingRate": 0,
        "totalGuests": 0,
        "avgConfirmedGuests": 0,
        "latestSubmission": None,
        "busiestDay": None,
    }


def test_summarize_counts_and_rates():
    records = [
        rsvp("Budi", "attending", 2, "2025-04-10T09:00:00+00:00"),
        rsvp("Siti", "attending", 3, "2025-04-09T09:00:00+00:00"),
        rsvp("Andi", "not_attending", 1, "2025-04-09T08:00:00+00:00"),
    ]
    metrics = summarize(records)
    assert metrics.total == 3
    assert metrics.attending == 2
    assert metrics.not_attending == 1
    assert metrics.attending_rate == 67
    assert metrics.not_attending_rate == 33
    assert metrics.total_guests == 6
    assert metrics.avg_confirmed_guests == 2.5
    assert metrics.latest_submission is records[0]
    assert metrics.busiest_day == "Wednesday, 9 April"


def test_summarize_no_attending_average_is_zero():
    metrics = summarize([rsvp("Andi", "not_attending", 4, "2025-04-09T08:00:00+00:00")])
    assert metrics.avg_confirmed_guests == 0
    assert metrics.attending_rate == 0
    assert metrics.not_attending_rate == 100


def test_busiest_day_tie_goes_to_earliest_date():
    records = [
        rsvp("A", "attending", 0, "2025-04-11T10:00:00+00:00"),
        rsvp("B", "attending", 0, "2025-04-10T10:00:00+00:00"),
    ]
    assert summarize(records).busiest_day == "Thursday, 10 April"


def test_day_key_uses_utc():
    assert day_key("2025-04-10T23:30:00-02:00") == "2025-04-11"
    assert day_key("2025-04-10T01:00:00.000Z") == "2025-04-10"
    assert day_key(datetime(2025, 4, 10, 23, 0, tzinfo=timezone.utc)) == "2025-04-10"
    assert day_key("not a date") is None
    assert day_key(None) is None


def test_percent_rounds_half_up():
    assert percent(1, 8) == 13
    assert percent(2, 3) == 67
    assert percent(0, 0) == 0


def test_build_timeline_sorted_with_ratios():
    records = [
        rsvp("A", "attending", 1, "2025-04-12T10:00:00+00:00"),
        rsvp("B", "not_attending", 0, "2025-04-10T10:00:00+00:00"),
        rsvp("C", "attending", 2, "2025-04-10T12:00:00+00:00"),
        rsvp("D", "attending", 2, "2025-04-10T13:00:00+00:00"),
        rsvp("E", "attending", 2, "garbage"),
    ]
    timeline = build_timeline(records)
    assert [b.date for b in timeline] == ["2025-04-10", "2025-04-12"]

    first = timeline[0]
    assert (first.attending_count, first.not_attending_count, first.total) == (2, 1, 3)
    assert first.attending_ratio == 67
    assert first.label == "Thu, 10 Apr"
    for bucket in timeline:
        assert bucket.total == bucket.attending_count + bucket.not_attending_count

    assert build_timeline([]) == []


def test_filter_entries():
    records = [
        rsvp("Budi", "attending", 1, "2025-04-10T10:00:00+00:00", "Selamat!"),
        rsvp("Siti", "not_attending", 0, "2025-04-10T10:00:00+00:00", "Maaf, budi pekerti"),
        rsvp("Andi", "attending", 0, "2025-04-10T10:00:00+00:00"),
    ]
    assert [r["name"] for r in filter_entries(records, status="attending")] == ["Budi", "Andi"]
    assert [r["name"] for r in filter_entries(records, query=" BUDI ")] == ["Budi", "Siti"]
    assert [r["name"] for r in filter_entries(records, status="not_attending", query="budi")] == ["Siti"]
    assert filter_entries(records, status="bogus") == records
