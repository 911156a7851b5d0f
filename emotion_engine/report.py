"""End-to-end emotion report: records -> breakdown -> geometry, narrative, resources."""

from __future__ import annotations

from dataclasses import asdict, replace
from enum import Enum
from typing import Optional

from emotion_engine import config
from emotion_engine.breakdown import summarize
from emotion_engine.gateway import AugmentationGateway, AugmentationRequest, AugmentationResult
from emotion_engine.narrative import narrate
from emotion_engine.radar import radar_points, scale_factor
from emotion_engine.resources import recommend_resources
from emotion_engine.schema import EmotionReport, NarrativeResult, TaskEmotionRecord, ViewGranularity, coerce_view


def build_report(
    records: list[TaskEmotionRecord],
    view: ViewGranularity = ViewGranularity.TODAY,
    radius: Optional[float] = None,
    gateway: Optional[AugmentationGateway] = None,
) -> EmotionReport:
    """Compute every derived structure for one window of task records.

    With ``gateway`` set the narrative may be augmented, bounded by the
    gateway timeout; without it the report is fully deterministic.
    """

    view = coerce_view(view)
    summary = summarize(records)
    breakdown, task_count = summary.breakdown, summary.task_count

    bucket, resources = recommend_resources(breakdown, task_count)
    return EmotionReport(
        view=view,
        summary=summary,
        scale_factor=scale_factor(task_count, view),
        points=radar_points(breakdown, task_count, view, config.CHART_RADIUS if radius is None else radius),
        narrative=narrate(breakdown, task_count, view, gateway),
        bucket=bucket,
        resources=resources,
    )


def augmentation_request_for(report: EmotionReport) -> AugmentationRequest:
    return AugmentationRequest(report.summary.breakdown, report.summary.task_count, report.view)


def with_augmentation(report: EmotionReport, result: Optional[AugmentationResult]) -> EmotionReport:
    """Swap in augmented narrative text, keeping the report unchanged when there is none."""

    if result is None:
        return report
    return replace(report, narrative=NarrativeResult(text=result.text, source="augmented", keywords=result.keywords))


def _plain(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def report_to_dict(report: EmotionReport) -> dict:
    """Return a JSON-serializable representation of a report."""

    return _plain(asdict(report))
