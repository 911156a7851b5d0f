"""Content recommendation buckets and the curated resource catalogue."""

from __future__ import annotations

from typing import Optional

from emotion_engine.schema import (
    EmotionBreakdown,
    HelpfulResource,
    ResourceBucketKey,
    ResourceCategory,
    coerce_breakdown,
    validate_task_count,
)

TOOL, READING, AUDIO, VIDEO = (
    ResourceCategory.TOOL,
    ResourceCategory.READING,
    ResourceCategory.AUDIO,
    ResourceCategory.VIDEO,
)

_REST_TALK = '"Why You Don\'t Have to Be Productive Every Day" – TEDx Talk'

RESOURCES: dict[ResourceBucketKey, list[HelpfulResource]] = {
    ResourceBucketKey.BALANCED: [
        HelpfulResource("tools-1", TOOL, "🔧", _REST_TALK, "A short reminder to slow down and recharge."),
        HelpfulResource("read-1", READING, "📖", '"The Art of Rest" – Alex Pang', "How rest restores focus and creativity."),
        HelpfulResource(
            "podcast-1",
            AUDIO,
            "🎙️",
            '"How Designers Communicate Better with Engineers" – Lenny\'s Podcast',
            "Simple ways to bridge creative and technical thinking.",
        ),
        HelpfulResource("video-1", VIDEO, "▶️", _REST_TALK, "A quick talk on slowing down with intention."),
    ],
    ResourceBucketKey.STRUGGLING: [
        HelpfulResource(
            "tools-2", TOOL, "🔧", "Notion Template: Daily Reset Checklist",
            "A simple way to reset when things feel overwhelming.",
        ),
        HelpfulResource(
            "read-2", READING, "📖", '"Overcoming Creative Blocks" – Austin Kleon',
            "Practical strategies for getting unstuck.",
        ),
        HelpfulResource(
            "podcast-2", AUDIO, "🎙️", '"Managing Design Stress" – Design Better Podcast',
            "How to handle pressure without burning out.",
        ),
        HelpfulResource(
            "video-2", VIDEO, "▶️", '"When Design Feels Hard" – TEDx Talk',
            "A reminder that struggle leads to growth.",
        ),
    ],
    ResourceBucketKey.ENERGIZED: [
        HelpfulResource(
            "tools-3", TOOL, "🔧", "Figma Plugin: Design Systems Organizer",
            "Channel your energy into building better systems.",
        ),
        HelpfulResource(
            "read-3", READING, "📖", '"Creative Flow" – Mihaly Csikszentmihalyi',
            "The science behind your creative momentum.",
        ),
        HelpfulResource(
            "podcast-3", AUDIO, "🎙️", '"Scaling Your Design Impact" – High Resolution',
            "How to amplify your creative work.",
        ),
        HelpfulResource(
            "video-3", VIDEO, "▶️", '"The Power of Creative Energy" – TEDx',
            "Sustaining momentum in creative work.",
        ),
    ],
    ResourceBucketKey.TIRED: [
        HelpfulResource(
            "tools-4", TOOL, "🔧", "Calm App: 5-Minute Designer Recharge",
            "Quick meditation for creative professionals.",
        ),
        HelpfulResource(
            "read-4", READING, "📖", '"Rest is also growth" – Designer\'s Guide to Self-Care',
            "Why resting is productive work.",
        ),
        HelpfulResource(
            "podcast-4", AUDIO, "🎙️", '"Avoiding Designer Burnout" – Design Details',
            "Recognizing and preventing creative exhaustion.",
        ),
        HelpfulResource(
            "video-4", VIDEO, "▶️", '"The Science of Rest" – TED Talk',
            "How intentional rest boosts creativity.",
        ),
    ],
    ResourceBucketKey.DEFAULT: [
        HelpfulResource("tools-default", TOOL, "🔧", _REST_TALK, "A short reminder to slow down and recharge."),
        HelpfulResource(
            "read-default", READING, "📖", '"The Art of Rest" – Alex Pang',
            "How rest restores focus and creativity.",
        ),
        HelpfulResource(
            "podcast-default",
            AUDIO,
            "🎙️",
            '"How Designers Communicate Better with Engineers" – Lenny\'s Podcast',
            "Simple ways to bridge creative and technical thinking.",
        ),
        HelpfulResource("video-default", VIDEO, "▶️", _REST_TALK, "A quick talk on slowing down with intention."),
    ],
}


def derive_scores(breakdown: EmotionBreakdown) -> dict[str, float]:
    breakdown = coerce_breakdown(breakdown)
    return {
        "positive_score": breakdown.positive_score,
        "negative_score": breakdown.negative_score,
        "energy_level": breakdown.excited * 1.5 + breakdown.happy * 1.2 + breakdown.calm * 0.8,
        "stress_level": breakdown.frustrated * 1.5 + breakdown.anxious * 1.3,
    }


def select_bucket(breakdown: EmotionBreakdown, task_count: Optional[int] = None) -> ResourceBucketKey:
    """Pick a recommendation bucket; rules are checked in order, first match wins.

    A ``task_count`` of None skips the count conditions of the energized and
    tired rules.
    """

    if task_count is not None:
        task_count = validate_task_count(task_count)
    scores = derive_scores(breakdown)

    if scores["stress_level"] > 0.5:
        return ResourceBucketKey.STRUGGLING
    if scores["energy_level"] > 0.7 and task_count is not None and task_count >= 3:
        return ResourceBucketKey.ENERGIZED
    if scores["energy_level"] < 0.3 or (task_count is not None and task_count <= 1):
        return ResourceBucketKey.TIRED
    if scores["positive_score"] > scores["negative_score"]:
        return ResourceBucketKey.BALANCED
    return ResourceBucketKey.DEFAULT


def recommend_resources(
    breakdown: Optional[EmotionBreakdown] = None,
    task_count: Optional[int] = None,
) -> tuple[ResourceBucketKey, list[HelpfulResource]]:
    """Return the selected bucket and its four resources (one per category)."""

    if breakdown is None:
        key = ResourceBucketKey.DEFAULT
    else:
        key = select_bucket(breakdown, task_count)
    return key, list(RESOURCES[key])
