"""Rule-based reflective narrative with optional augmentation."""

from __future__ import annotations

import logging

from emotion_engine.gateway import AugmentationRequest
from emotion_engine.schema import (
    NEGATIVE_EMOTIONS,
    EmotionBreakdown,
    NarrativeResult,
    ViewGranularity,
    coerce_breakdown,
    coerce_view,
    validate_task_count,
)

logger = logging.getLogger(__name__)

NO_TASKS_MESSAGE = "You haven't logged any tasks yet today. How are you feeling?"
SIGNIFICANCE_THRESHOLD = 0.2


def _plural(task_count: int) -> str:
    return "s" if task_count != 1 else ""


def _very_low_activity(task_count, dominant, dominant_value) -> str:
    logged = f"You logged {task_count} task{_plural(task_count)} today"
    if dominant_value < 0.3:
        return f"{logged}. Your energy feels scattered—take a moment to center yourself."
    if dominant not in NEGATIVE_EMOTIONS:
        return f"{logged} and felt mostly {dominant}. A gentle start to the day."
    return f"{logged} but felt {dominant}. Remember to be kind to yourself."


def _moderate_activity(breakdown, task_count, tone, dominant, secondary, secondary_value) -> str:
    if tone == "positive":
        if secondary_value > SIGNIFICANCE_THRESHOLD:
            return f"You felt mostly {dominant} today with moments of {secondary}. You're finding your rhythm."
        return f"You felt {dominant} as you worked through {task_count} tasks today. Keep this momentum going."
    if breakdown.frustrated > 0.4:
        return f"Today felt challenging with {task_count} tasks. The frustration is real, but you're making progress."
    if breakdown.anxious > 0.4:
        return (
            f"You felt anxious while working on {task_count} tasks today. "
            "Take a deep breath—you're doing more than enough."
        )
    return f"You navigated {task_count} tasks today while feeling {dominant}. That takes courage."


def _high_activity(breakdown, task_count, tone, dominant) -> str:
    if tone == "positive":
        if breakdown.excited > 0.5:
            return f"You powered through {task_count} tasks with excitement and energy today! You're on fire."
        if breakdown.happy > 0.5:
            return f"You completed {task_count} tasks today and felt genuinely happy. That's the sweet spot."
        if breakdown.calm > 0.5:
            return f"You moved through {task_count} tasks with calm and focus today. Beautiful flow state."
        return f"You felt {dominant} while completing {task_count} tasks. You're in a good rhythm."
    if breakdown.frustrated > 0.5:
        return (
            f"You pushed through {task_count} tasks despite feeling frustrated. "
            "That's resilience. Take a break if you need it."
        )
    if breakdown.anxious > 0.5:
        return (
            f"You completed {task_count} tasks while managing anxiety. "
            "That takes real strength. Be proud of yourself."
        )
    return f"You worked through {task_count} tasks today while feeling {dominant}. Remember to pause and breathe."


def fallback_narrative(breakdown: EmotionBreakdown, task_count: int) -> str:
    """Name up to three significant emotions, or the dominant one when fewer than two stand out."""

    ranked = breakdown.ranked()
    dominant = ranked[0][0]
    significant = [name for name, value in ranked if value > SIGNIFICANCE_THRESHOLD][:3]
    if len(significant) >= 2:
        return f"You experienced a mix of emotions today—{', '.join(significant)}. That's the full spectrum of being human."
    return f"You completed {task_count} task{_plural(task_count)} today and felt mostly {dominant}."


def emotional_tone(breakdown: EmotionBreakdown) -> str:
    return "positive" if breakdown.positive_score > breakdown.negative_score else "challenging"


def generate_narrative(breakdown: EmotionBreakdown, task_count: int) -> str:
    """Map a breakdown and task count to one encouraging sentence.

    Branches are checked in order and the first match wins.
    """

    breakdown = coerce_breakdown(breakdown)
    task_count = validate_task_count(task_count)

    if task_count == 0:
        return NO_TASKS_MESSAGE

    ranked = breakdown.ranked()
    (dominant, dominant_value), (secondary, secondary_value) = ranked[0], ranked[1]
    tone = emotional_tone(breakdown)

    if task_count <= 2:
        return _very_low_activity(task_count, dominant, dominant_value)
    if task_count <= 5:
        return _moderate_activity(breakdown, task_count, tone, dominant, secondary, secondary_value)
    if task_count >= 6:
        return _high_activity(breakdown, task_count, tone, dominant)
    return fallback_narrative(breakdown, task_count)


def narrate(
    breakdown: EmotionBreakdown,
    task_count: int,
    view: ViewGranularity = ViewGranularity.TODAY,
    gateway=None,
) -> NarrativeResult:
    """Return the rule-based narrative, replaced by augmented text when available.

    The gateway gets one attempt with a hard overall deadline; failures and
    late answers are logged by the gateway and never raised here.
    """

    breakdown = coerce_breakdown(breakdown)
    text = generate_narrative(breakdown, task_count)
    if gateway is None:
        return NarrativeResult(text=text)

    augmented = gateway.augment_within_budget(AugmentationRequest(breakdown, task_count, coerce_view(view)))
    if augmented is None:
        return NarrativeResult(text=text)

    logger.debug(f"Using augmented narrative ({len(augmented.text)} chars)")
    return NarrativeResult(text=augmented.text, source="augmented", keywords=augmented.keywords)
