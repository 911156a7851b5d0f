"""Core data schema for emotion analytics."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from emotion_engine.errors import InputError
from emotion_engine.taxonomy import resolve_level

EMOTION_NAMES = ("calm", "happy", "excited", "frustrated", "anxious")
NEGATIVE_EMOTIONS = ("frustrated", "anxious")


class ViewGranularity(str, Enum):
    TODAY = "today"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def thresholds(self) -> "ViewThresholds":
        return VIEW_THRESHOLDS[self]


@dataclass(frozen=True)
class ViewThresholds:
    low: int
    medium: int
    high: int


VIEW_THRESHOLDS = {
    ViewGranularity.TODAY: ViewThresholds(low=5, medium=15, high=25),
    ViewGranularity.WEEKLY: ViewThresholds(low=10, medium=25, high=40),
    ViewGranularity.MONTHLY: ViewThresholds(low=20, medium=40, high=60),
}


class ResourceBucketKey(str, Enum):
    BALANCED = "balanced"
    STRUGGLING = "struggling"
    ENERGIZED = "energized"
    TIRED = "tired"
    DEFAULT = "default"


class ResourceCategory(str, Enum):
    TOOL = "tool"
    READING = "reading"
    AUDIO = "audio"
    VIDEO = "video"


@dataclass(frozen=True)
class TaskEmotionRecord:
    """A logged task with one or more emotion tags from the taxonomy.

    Tags may be levels or labels and are resolved to levels on construction.
    """

    description: str
    timestamp: datetime
    emotions: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.emotions:
            raise InputError(f"Task '{self.description}' has no emotion tags")
        if not isinstance(self.timestamp, datetime):
            raise InputError(f"Task '{self.description}' has no valid timestamp")
        object.__setattr__(self, "emotions", tuple(resolve_level(tag) for tag in self.emotions))
        object.__setattr__(self, "timestamp", local_wall_time(self.timestamp))


@dataclass(frozen=True)
class EmotionBreakdown:
    """Coverage fractions of a task window across the five buckets.

    Fields are independent: a task tagged with several emotions counts toward
    each of their buckets, so the values need not sum to 1.
    """

    calm: float = 0.0
    happy: float = 0.0
    excited: float = 0.0
    frustrated: float = 0.0
    anxious: float = 0.0

    def __post_init__(self) -> None:
        for name in EMOTION_NAMES:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InputError(f"Breakdown field '{name}' must be a number, got {value!r}")
            if math.isnan(value) or not 0.0 <= value <= 1.0:
                raise InputError(f"Breakdown field '{name}' must be within [0, 1], got {value!r}")
            object.__setattr__(self, name, float(value))

    @classmethod
    def from_dict(cls, payload: dict) -> "EmotionBreakdown":
        unknown = set(payload) - set(EMOTION_NAMES)
        if unknown:
            raise InputError(f"Unknown breakdown fields {sorted(unknown)}")
        return cls(**{name: payload.get(name, 0.0) for name in EMOTION_NAMES})

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in EMOTION_NAMES}

    def ranked(self) -> list[tuple[str, float]]:
        """Emotions by value descending; ties keep the canonical bucket order."""

        return sorted(self.as_dict().items(), key=lambda item: -item[1])

    @property
    def positive_score(self) -> float:
        return self.calm + self.happy + self.excited

    @property
    def negative_score(self) -> float:
        return self.frustrated + self.anxious


@dataclass(frozen=True)
class RadarPoint:
    emotion: str
    raw_value: float
    visual_value: float
    angle: float
    x: float
    y: float


@dataclass(frozen=True)
class NarrativeResult:
    text: str
    source: str = "rules"
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class HelpfulResource:
    id: str
    category: ResourceCategory
    icon: str
    title: str
    description: str
    url: Optional[str] = None


@dataclass(frozen=True)
class BreakdownSummary:
    breakdown: EmotionBreakdown
    task_count: int
    dominant_emotion: str
    dominant_emoji: str
    representative_tasks: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EmotionReport:
    view: ViewGranularity
    summary: BreakdownSummary
    scale_factor: float
    points: list[RadarPoint]
    narrative: NarrativeResult
    bucket: ResourceBucketKey
    resources: list[HelpfulResource]


def local_wall_time(value: datetime) -> datetime:
    """Return a naive local datetime; aware values are converted to the local zone.

    Records and window anchors are compared as naive local wall-clock times,
    so logs may mix offsets, "Z" suffixes and naive timestamps.
    """

    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing "Z" for UTC."""

    text = str(text).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def validate_task_count(task_count) -> int:
    """Reject negative, fractional or non-numeric task counts."""

    if isinstance(task_count, bool) or not isinstance(task_count, int):
        raise InputError(f"Task count must be an integer, got {task_count!r}")
    if task_count < 0:
        raise InputError(f"Task count must be non-negative, got {task_count}")
    return task_count


def coerce_breakdown(value) -> EmotionBreakdown:
    if isinstance(value, EmotionBreakdown):
        return value
    if isinstance(value, dict):
        return EmotionBreakdown.from_dict(value)
    raise InputError(f"Expected an EmotionBreakdown or mapping, got {type(value).__name__}")


def coerce_view(value) -> ViewGranularity:
    try:
        return ViewGranularity(value)
    except ValueError as exc:
        raise InputError(f"Unknown view '{value}', expected one of today/weekly/monthly") from exc
