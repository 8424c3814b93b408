"""Tests for expanding a dosing plan into notification slots."""

from medremind.datamodel import Frequency, ReminderInput, SlotStatus
from medremind.world.schedule import generate_notification_schedule, get_times_for_frequency


def make_input(frequency="daily", start="2024-01-01", end="2024-01-03"):
    return ReminderInput(
        medication_name="Ibuprofen",
        dosage="200mg",
        frequency=frequency,
        start_date=start,
        end_date=end,
    )


def test_twice_daily_over_three_days_yields_six_slots():
    slots = generate_notification_schedule(make_input("twice"))

    assert len(slots) == 6
    assert [(s.date, s.time) for s in slots] == [
        ("2024-01-01", "09:00"), ("2024-01-01", "21:00"),
        ("2024-01-02", "09:00"), ("2024-01-02", "21:00"),
        ("2024-01-03", "09:00"), ("2024-01-03", "21:00"),
    ]


def test_daily_slot_count_matches_inclusive_days():
    slots = generate_notification_schedule(make_input("daily", "2024-01-01", "2024-01-10"))
    assert len(slots) == 10
    assert all(s.time == "09:00" for s in slots)


def test_single_day_range_is_inclusive():
    slots = generate_notification_schedule(make_input("twice", "2024-05-05", "2024-05-05"))
    assert [(s.date, s.time) for s in slots] == [("2024-05-05", "09:00"), ("2024-05-05", "21:00")]


def test_dates_stay_within_range_across_month_and_leap_day():
    slots = generate_notification_schedule(make_input("daily", "2024-02-27", "2024-03-02"))

    dates = [s.date for s in slots]
    assert dates == ["2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01", "2024-03-02"]
    assert all("2024-02-27" <= d <= "2024-03-02" for d in dates)


def test_weekly_fires_every_day_like_daily():
    weekly = generate_notification_schedule(make_input("weekly", "2024-01-01", "2024-01-14"))
    daily = generate_notification_schedule(make_input("daily", "2024-01-01", "2024-01-14"))

    assert len(weekly) == 14
    assert [(s.date, s.time) for s in weekly] == [(s.date, s.time) for s in daily]


def test_unknown_frequency_falls_back_to_morning_only():
    assert Frequency.parse("every-other-day") is Frequency.UNKNOWN
    assert get_times_for_frequency("every-other-day") == ("09:00",)
    assert get_times_for_frequency("") == ("09:00",)

    slots = generate_notification_schedule(make_input("thrice"))
    assert len(slots) == 3


def test_slot_ids_are_unique_within_one_call():
    slots = generate_notification_schedule(make_input("twice", "2024-01-01", "2024-12-31"))

    ids = [s.id for s in slots]
    assert len(slots) == 366 * 2
    assert len(set(ids)) == len(ids)
    assert ids == sorted(ids)


def test_slot_ids_do_not_repeat_across_calls():
    first = generate_notification_schedule(make_input("twice"))
    second = generate_notification_schedule(make_input("twice"))
    assert not {s.id for s in first} & {s.id for s in second}


def test_new_slots_are_pending():
    slots = generate_notification_schedule(make_input())
    assert all(s.status == SlotStatus.PENDING.value for s in slots)


def test_inverted_range_produces_nothing():
    assert generate_notification_schedule(make_input("daily", "2024-01-05", "2024-01-01")) == []
