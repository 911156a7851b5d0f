"""JSON adapter for task emotion records."""

from __future__ import annotations

import json

from emotion_engine.schema import InputError, TaskEmotionRecord, parse_timestamp


def _tags_of(item: dict) -> list:
    tags = item.get("emotions")
    if tags:
        return tags if isinstance(tags, list) else [tags]
    # Single-emotion records predate multi-tag logging.
    single = item.get("emotion")
    return [single] if single not in (None, "") else []


def _parse_item(item, index: int) -> TaskEmotionRecord:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")

    missing = [field for field in ("description", "timestamp") if not item.get(field)]
    tags = _tags_of(item)
    if not tags:
        missing.append("emotions")
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    try:
        timestamp = parse_timestamp(item["timestamp"])
    except ValueError as exc:
        raise ValueError(f"Item {index}: malformed timestamp") from exc

    try:
        return TaskEmotionRecord(description=str(item["description"]).strip(), timestamp=timestamp, emotions=tuple(tags))
    except InputError as exc:
        raise ValueError(f"Item {index}: {exc}") from exc


def parse(file_path: str) -> list[TaskEmotionRecord]:
    """Parse a JSON file into task emotion records."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
