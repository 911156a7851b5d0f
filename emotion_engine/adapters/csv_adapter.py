"""CSV adapter for task emotion records."""

from __future__ import annotations

import csv

from emotion_engine.schema import InputError, TaskEmotionRecord, parse_timestamp

_REQUIRED_FIELDS = ("description", "timestamp", "emotions")
_TAG_SEPARATOR = ";"


def _parse_row(row: dict, row_number: int) -> TaskEmotionRecord:
    missing = [field for field in _REQUIRED_FIELDS if not (row.get(field) or "").strip()]
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    try:
        timestamp = parse_timestamp(row["timestamp"])
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: malformed timestamp") from exc

    tags = tuple(tag for tag in row["emotions"].split(_TAG_SEPARATOR) if tag.strip())
    try:
        return TaskEmotionRecord(description=row["description"].strip(), timestamp=timestamp, emotions=tags)
    except InputError as exc:
        raise ValueError(f"Row {row_number}: {exc}") from exc


def parse(file_path: str) -> list[TaskEmotionRecord]:
    """Parse a CSV file into task emotion records.

    Emotion tags are separated by ``;`` and may be levels or labels,
    e.g. ``3;Happy``. Rows are numbered from 2 in error messages to match
    spreadsheet line numbers.
    """

    with open(file_path, newline="", encoding="utf-8") as handle:
        rows = list(csv.DictReader(handle))
    return [_parse_row(row, row_number) for row_number, row in enumerate(rows, start=2)]
