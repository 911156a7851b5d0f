"""Fine-grained emotion levels and their coarse analytic buckets."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from emotion_engine.errors import InputError


@dataclass(frozen=True)
class EmotionLevel:
    level: int
    emoji: str
    label: str


EMOTION_LEVELS = {
    1: EmotionLevel(1, "😀", "Happy"),
    2: EmotionLevel(2, "😌", "Calm"),
    3: EmotionLevel(3, "🤩", "Excited"),
    4: EmotionLevel(4, "😠", "Frustrated"),
    5: EmotionLevel(5, "😢", "Sad"),
    6: EmotionLevel(6, "😰", "Anxious"),
    7: EmotionLevel(7, "😮", "Surprised"),
    8: EmotionLevel(8, "😐", "Neutral"),
    9: EmotionLevel(9, "🥹", "Nostalgic"),
    10: EmotionLevel(10, "⚡", "Energized"),
    11: EmotionLevel(11, "🙂", "Normal"),
    12: EmotionLevel(12, "😴", "Tired"),
    13: EmotionLevel(13, "😊", "Satisfied"),
    14: EmotionLevel(14, "😖", "Annoyed"),
    15: EmotionLevel(15, "😫", "Drained"),
    16: EmotionLevel(16, "😍", "Proud"),
}

BUCKET_LEVELS = {
    "calm": (2, 9, 11),
    "happy": (1, 13, 16),
    "excited": (3, 7, 10),
    "frustrated": (4, 5, 14, 15),
    "anxious": (6, 8, 12),
}

NEUTRAL_EMOJI = "😐"

_LEVEL_TO_BUCKET = {level: bucket for bucket, levels in BUCKET_LEVELS.items() for level in levels}
_LABEL_TO_LEVEL = {item.label.lower(): item.level for item in EMOTION_LEVELS.values()}


def resolve_level(tag) -> int:
    """Return the taxonomy level for an integer level, numeric string or label."""

    if isinstance(tag, bool):
        raise InputError(f"Invalid emotion tag {tag!r}")
    if isinstance(tag, int):
        level = tag
    else:
        text = str(tag).strip()
        if text.isdigit():
            level = int(text)
        elif text.lower() in _LABEL_TO_LEVEL:
            level = _LABEL_TO_LEVEL[text.lower()]
        else:
            raise InputError(f"Unknown emotion tag '{text}'")
    if level not in EMOTION_LEVELS:
        raise InputError(f"Emotion level {level} is outside the taxonomy (1-{len(EMOTION_LEVELS)})")
    return level


def bucket_for(level: int) -> str:
    try:
        return _LEVEL_TO_BUCKET[level]
    except KeyError as exc:
        raise InputError(f"Emotion level {level!r} is outside the taxonomy") from exc


def dominant_emoji(levels: list[int]) -> str:
    """Emoji of the most frequent level; ties go to the lowest level."""

    if not levels:
        return NEUTRAL_EMOJI
    counts = Counter(levels)
    level = min(counts, key=lambda lvl: (-counts[lvl], lvl))
    return EMOTION_LEVELS[level].emoji
