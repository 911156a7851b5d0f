"""Radar chart scaling and point geometry."""

from __future__ import annotations

import math

import numpy as np

from emotion_engine.schema import (
    EMOTION_NAMES,
    EmotionBreakdown,
    InputError,
    RadarPoint,
    ViewGranularity,
    coerce_breakdown,
    coerce_view,
    validate_task_count,
)

MIN_VISUAL_VALUE = 0.08
MAX_SCALE = 1.2
MIN_SCALE = 1.0

_ANGLES = np.arange(len(EMOTION_NAMES)) * (2 * np.pi / len(EMOTION_NAMES)) - np.pi / 2


def scale_factor(task_count: int, view: ViewGranularity) -> float:
    """Boost sparse windows so the chart never looks collapsed.

    Piecewise linear in ``task_count``: 1.2 -> 1.15 up to ``low``, 1.15 -> 1.05
    up to ``medium``, 1.05 -> 1.0 up to ``high``, then flat at 1.0.
    """

    task_count = validate_task_count(task_count)
    t = coerce_view(view).thresholds

    if task_count <= t.low:
        return MAX_SCALE - (MAX_SCALE - 1.15) * (task_count / t.low)
    if task_count <= t.medium:
        progress = (task_count - t.low) / (t.medium - t.low)
        return 1.15 - 0.1 * progress
    if task_count <= t.high:
        progress = (task_count - t.medium) / (t.high - t.medium)
        return 1.05 - 0.05 * progress
    return MIN_SCALE


def visual_value(raw: float, factor: float) -> float:
    floored = max(raw, MIN_VISUAL_VALUE)
    return min(floored * factor, 1.0)


def radar_points(
    breakdown: EmotionBreakdown,
    task_count: int,
    view: ViewGranularity,
    radius: float = 1.0,
) -> list[RadarPoint]:
    """Return the five chart points at equal spacing, starting from the top."""

    breakdown = coerce_breakdown(breakdown)
    if isinstance(radius, bool) or not isinstance(radius, (int, float)) or not math.isfinite(radius) or radius <= 0:
        raise InputError(f"Chart radius must be a positive number, got {radius!r}")

    factor = scale_factor(task_count, view)
    raw = np.array([getattr(breakdown, name) for name in EMOTION_NAMES], dtype=float)
    visual = np.minimum(np.maximum(raw, MIN_VISUAL_VALUE) * factor, 1.0)
    xs = np.cos(_ANGLES) * visual * radius
    ys = np.sin(_ANGLES) * visual * radius

    return [
        RadarPoint(
            emotion=name,
            raw_value=float(raw[i]),
            visual_value=float(visual[i]),
            angle=float(_ANGLES[i]),
            x=float(xs[i]),
            y=float(ys[i]),
        )
        for i, name in enumerate(EMOTION_NAMES)
    ]
