"""Build an emotion report from a CSV/JSON task log."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from emotion_engine import config
from emotion_engine.adapters import csv_adapter, json_adapter
from emotion_engine.breakdown import select_window
from emotion_engine.gateway import AugmentationGateway
from emotion_engine.report import build_report, report_to_dict
from emotion_engine.schema import ViewGranularity, parse_timestamp


def _load_records(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Summarize logged task emotions")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON task log")
    parser.add_argument("--view", choices=[v.value for v in ViewGranularity], default="today")
    parser.add_argument("--now", help="ISO timestamp anchoring the window (default: current time)")
    parser.add_argument("--all", action="store_true", help="Use every record instead of the view's window")
    parser.add_argument("--augment", action="store_true", help="Try the configured augmentation gateway")
    args = parser.parse_args()

    logging.basicConfig(level=config.LOG_LEVEL)

    view = ViewGranularity(args.view)
    records = _load_records(Path(args.data))
    if not args.all:
        now = parse_timestamp(args.now) if args.now else datetime.now()
        records = select_window(records, view, now)

    gateway = AugmentationGateway.from_config() if args.augment else None
    report = build_report(records, view, gateway=gateway)
    print(json.dumps(report_to_dict(report), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
