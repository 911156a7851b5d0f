"""Demo script for emotion-engine."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from emotion_engine.adapters.csv_adapter import parse
from emotion_engine.report import build_report
from emotion_engine.schema import ViewGranularity


def main() -> None:
    records = parse(str(Path(__file__).with_name("sample_tasks.csv")))
    for view in ViewGranularity:
        report = build_report(records, view)
        print(f"[{view.value}] scale={report.scale_factor:.3f} bucket={report.bucket.value}")
        print("  ", report.narrative.text)
        for point in report.points:
            print(f"   {point.emotion:<10} raw={point.raw_value:.2f} visual={point.visual_value:.2f}")


if __name__ == "__main__":
    main()
