from datetime import datetime, timedelta, timezone

import pytest

from emotion_engine.breakdown import aggregate, select_window, summarize, window_bounds
from emotion_engine.schema import InputError, TaskEmotionRecord, ViewGranularity, local_wall_time


def sample_records():
    return [
        TaskEmotionRecord("Wireframe onboarding", datetime.fromisoformat("2025-03-03T09:00:00"), (3, 1)),
        TaskEmotionRecord("Interview synthesis", datetime.fromisoformat("2025-03-03T11:00:00"), (2,)),
        TaskEmotionRecord("Design review", datetime.fromisoformat("2025-03-03T14:00:00"), (4, 6)),
        TaskEmotionRecord("Polish icons", datetime.fromisoformat("2025-03-03T16:00:00"), (1, 13)),
    ]


def test_aggregate_coverage_fractions_are_not_normalized():
    breakdown, task_count = aggregate(sample_records())
    assert task_count == 4
    assert breakdown.as_dict() == {
        "calm": 0.25,
        "happy": 0.5,
        "excited": 0.25,
        "frustrated": 0.25,
        "anxious": 0.25,
    }
    assert sum(breakdown.as_dict().values()) == pytest.approx(1.5)


def test_aggregate_empty_window():
    breakdown, task_count = aggregate([])
    assert task_count == 0
    assert all(value == 0.0 for value in breakdown.as_dict().values())

    summary = summarize([])
    assert summary.dominant_emotion == "neutral"
    assert summary.representative_tasks == {}


def test_summarize_is_independent_of_input_order():
    records = sample_records()
    assert summarize(records) == summarize(list(reversed(records)))


def test_summarize_dominant_and_representatives():
    summary = summarize(sample_records())
    assert summary.dominant_emotion == "happy"
    assert summary.dominant_emoji == "😀"
    assert summary.representative_tasks["happy"] == "Wireframe onboarding"
    assert summary.representative_tasks["anxious"] == "Design review"


def test_unknown_level_is_rejected_on_construction():
    with pytest.raises(InputError):
        TaskEmotionRecord("Mystery", datetime.fromisoformat("2025-03-03T09:00:00"), (99,))
    with pytest.raises(InputError):
        TaskEmotionRecord("Mystery", datetime.fromisoformat("2025-03-03T09:00:00"), ("Bored",))


def test_record_resolves_labels():
    record = TaskEmotionRecord("Standup", datetime.fromisoformat("2025-03-03T09:00:00"), ("calm", "10"))
    assert record.emotions == (2, 10)


def test_record_without_tags_is_rejected():
    with pytest.raises(InputError):
        TaskEmotionRecord("Empty", datetime.fromisoformat("2025-03-03T09:00:00"), ())


def test_weekly_window_starts_on_sunday():
    now = datetime.fromisoformat("2025-03-05T12:00:00")
    records = [
        TaskEmotionRecord(label, datetime.fromisoformat(ts), (2,))
        for label, ts in [
            ("saturday before", "2025-03-01T23:59:00"),
            ("sunday", "2025-03-02T00:00:00"),
            ("saturday", "2025-03-08T18:00:00"),
            ("next sunday", "2025-03-09T00:00:00"),
        ]
    ]
    selected = select_window(records, ViewGranularity.WEEKLY, now)
    assert [r.description for r in selected] == ["sunday", "saturday"]


def test_today_and_monthly_bounds():
    now = datetime.fromisoformat("2025-12-15T08:30:00")
    assert window_bounds(ViewGranularity.TODAY, now) == (
        datetime(2025, 12, 15),
        datetime(2025, 12, 16),
    )
    assert window_bounds("monthly", now) == (datetime(2025, 12, 1), datetime(2026, 1, 1))


def test_aware_timestamps_become_local_wall_time():
    aware = datetime(2025, 3, 3, 10, 0, tzinfo=timezone.utc)
    record = TaskEmotionRecord("Sync", aware, (2,))
    assert record.timestamp.tzinfo is None
    assert record.timestamp == aware.astimezone().replace(tzinfo=None)


def test_summarize_mixed_naive_and_aware_records():
    records = [
        TaskEmotionRecord("Naive", datetime(2025, 3, 3, 9, 0), (2,)),
        TaskEmotionRecord("Aware", datetime(2025, 3, 3, 10, 0, tzinfo=timezone(timedelta(hours=5))), (1,)),
    ]
    summary = summarize(records)
    assert summary.task_count == 2
    assert summary.breakdown.calm == 0.5


def test_select_window_with_aware_records_and_naive_now():
    stamp = datetime.now(timezone.utc)
    records = [TaskEmotionRecord("Now", stamp, (3,))]
    now = local_wall_time(stamp)
    assert select_window(records, ViewGranularity.TODAY, now) == records
    assert select_window(records, ViewGranularity.TODAY, stamp) == records
