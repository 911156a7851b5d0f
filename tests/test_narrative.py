import time
from unittest.mock import MagicMock, patch

import pytest

from emotion_engine.gateway import AugmentationGateway, AugmentationResult
from emotion_engine.narrative import NO_TASKS_MESSAGE, fallback_narrative, generate_narrative, narrate
from emotion_engine.schema import EmotionBreakdown, InputError, ViewGranularity


def test_no_tasks_message():
    assert generate_narrative(EmotionBreakdown(), 0) == (
        "You haven't logged any tasks yet today. How are you feeling?"
    )
    assert NO_TASKS_MESSAGE == generate_narrative(EmotionBreakdown(calm=0.7), 0)


def test_very_low_activity_branches():
    assert generate_narrative(EmotionBreakdown(calm=1.0), 1) == (
        "You logged 1 task today and felt mostly calm. A gentle start to the day."
    )
    assert generate_narrative(EmotionBreakdown(frustrated=1.0), 2) == (
        "You logged 2 tasks today but felt frustrated. Remember to be kind to yourself."
    )
    scattered = EmotionBreakdown(calm=0.25, happy=0.25, excited=0.25, frustrated=0.25, anxious=0.25)
    assert generate_narrative(scattered, 2) == (
        "You logged 2 tasks today. Your energy feels scattered—take a moment to center yourself."
    )


def test_moderate_activity_branches():
    assert generate_narrative(EmotionBreakdown(happy=0.6, calm=0.4), 4) == (
        "You felt mostly happy today with moments of calm. You're finding your rhythm."
    )
    assert generate_narrative(EmotionBreakdown(excited=1.0), 3) == (
        "You felt excited as you worked through 3 tasks today. Keep this momentum going."
    )
    assert generate_narrative(EmotionBreakdown(frustrated=0.5, calm=0.2), 5).startswith(
        "Today felt challenging with 5 tasks."
    )
    assert generate_narrative(EmotionBreakdown(anxious=0.5, happy=0.1), 5) == (
        "You felt anxious while working on 5 tasks today. Take a deep breath—you're doing more than enough."
    )
    assert generate_narrative(EmotionBreakdown(frustrated=0.35, anxious=0.3, calm=0.3), 4) == (
        "You navigated 4 tasks today while feeling frustrated. That takes courage."
    )


def test_high_activity_branches():
    assert generate_narrative(EmotionBreakdown(excited=0.6, happy=0.2), 7).startswith("You powered through 7 tasks")
    assert generate_narrative(EmotionBreakdown(anxious=0.6, calm=0.1), 8).startswith(
        "You completed 8 tasks while managing anxiety."
    )
    # Equal positive and negative scores count as a challenging tone.
    assert generate_narrative(EmotionBreakdown(happy=0.5, frustrated=0.5), 6) == (
        "You worked through 6 tasks today while feeling happy. Remember to pause and breathe."
    )


def test_fallback_sentences():
    mixed = EmotionBreakdown(calm=0.3, happy=0.35, anxious=0.25, excited=0.1)
    assert fallback_narrative(mixed, 4) == (
        "You experienced a mix of emotions today—happy, calm, anxious. That's the full spectrum of being human."
    )
    assert fallback_narrative(EmotionBreakdown(excited=0.9), 1) == (
        "You completed 1 task today and felt mostly excited."
    )


def test_generate_narrative_is_pure():
    breakdown = EmotionBreakdown(calm=0.4, happy=0.3, frustrated=0.2)
    assert generate_narrative(breakdown, 9) == generate_narrative(breakdown, 9)


def test_negative_task_count_rejected():
    with pytest.raises(InputError):
        generate_narrative(EmotionBreakdown(), -1)


class _StubGateway:
    def __init__(self, result):
        self.result = result
        self.requests = []

    def augment_within_budget(self, request):
        self.requests.append(request)
        return self.result


def test_narrate_without_gateway_uses_rules():
    result = narrate(EmotionBreakdown(calm=1.0), 1)
    assert result.source == "rules"
    assert result.keywords == ()


def test_narrate_prefers_augmented_text():
    gateway = _StubGateway(AugmentationResult("Steady, focused day.", ("Deep work",)))
    result = narrate(EmotionBreakdown(calm=1.0), 6, ViewGranularity.WEEKLY, gateway)
    assert result.text == "Steady, focused day."
    assert result.source == "augmented"
    assert result.keywords == ("Deep work",)
    assert gateway.requests[0].view is ViewGranularity.WEEKLY


def test_narrate_falls_back_when_augmentation_fails():
    result = narrate(EmotionBreakdown(calm=1.0), 1, gateway=_StubGateway(None))
    assert result.source == "rules"
    assert result.text == generate_narrative(EmotionBreakdown(calm=1.0), 1)


def test_narrate_does_not_wait_past_gateway_timeout():
    def slow_post(*args, **kwargs):
        time.sleep(1.5)
        response = MagicMock()
        response.json.return_value = {"text": "Arrived too late."}
        return response

    gateway = AugmentationGateway("http://gateway.test/augment", timeout=0.2)
    with patch("emotion_engine.gateway.requests.post", side_effect=slow_post):
        started = time.monotonic()
        result = narrate(EmotionBreakdown(calm=1.0), 3, gateway=gateway)
        elapsed = time.monotonic() - started

    assert elapsed < 1.0
    assert result.source == "rules"
    assert result.text == generate_narrative(EmotionBreakdown(calm=1.0), 3)
