"""Emotion breakdown aggregation over a task window."""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import datetime, timedelta

from emotion_engine.schema import (
    EMOTION_NAMES,
    BreakdownSummary,
    EmotionBreakdown,
    TaskEmotionRecord,
    ViewGranularity,
    coerce_view,
    local_wall_time,
)
from emotion_engine.taxonomy import NEUTRAL_EMOJI, bucket_for, dominant_emoji


def _buckets_of(record: TaskEmotionRecord) -> set[str]:
    return {bucket_for(level) for level in record.emotions}


def aggregate(records: list[TaskEmotionRecord]) -> tuple[EmotionBreakdown, int]:
    """Return per-bucket coverage fractions and the number of tasks.

    Each field is the share of tasks carrying at least one tag in that bucket.
    An empty window yields an all-zero breakdown and a zero count.
    """

    if not records:
        return EmotionBreakdown(), 0

    coverage = Counter()
    for record in records:
        coverage.update(_buckets_of(record))

    total = len(records)
    return EmotionBreakdown(**{name: coverage[name] / total for name in EMOTION_NAMES}), total


def summarize(records: list[TaskEmotionRecord]) -> BreakdownSummary:
    """Aggregate records and attach the dominant emotion and representative tasks."""

    breakdown, task_count = aggregate(records)
    if task_count == 0:
        return BreakdownSummary(
            breakdown=breakdown,
            task_count=0,
            dominant_emotion="neutral",
            dominant_emoji=NEUTRAL_EMOJI,
        )

    representative_tasks: dict[str, str] = {}
    levels_by_bucket: dict[str, list[int]] = defaultdict(list)
    for record in sorted(records, key=lambda r: (r.timestamp, r.description)):
        for level in record.emotions:
            bucket = bucket_for(level)
            levels_by_bucket[bucket].append(level)
            representative_tasks.setdefault(bucket, record.description)

    dominant = breakdown.ranked()[0][0]
    return BreakdownSummary(
        breakdown=breakdown,
        task_count=task_count,
        dominant_emotion=dominant,
        dominant_emoji=dominant_emoji(levels_by_bucket[dominant]),
        representative_tasks={name: representative_tasks[name] for name in EMOTION_NAMES if name in representative_tasks},
    )


def window_bounds(view: ViewGranularity, now: datetime) -> tuple[datetime, datetime]:
    """Return the half-open [start, end) interval a view covers around ``now``."""

    view = coerce_view(view)
    now = local_wall_time(now)
    day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if view is ViewGranularity.TODAY:
        return day_start, day_start + timedelta(days=1)
    if view is ViewGranularity.WEEKLY:
        # Weeks start on Sunday.
        start = day_start - timedelta(days=(now.weekday() + 1) % 7)
        return start, start + timedelta(days=7)

    start = day_start.replace(day=1)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def select_window(records: list[TaskEmotionRecord], view: ViewGranularity, now: datetime) -> list[TaskEmotionRecord]:
    """Keep the records whose timestamp falls inside the view's window."""

    start, end = window_bounds(view, now)
    return [record for record in records if start <= record.timestamp < end]
