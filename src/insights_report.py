"""
Symptom Insights Report
=======================
Runs the trigger correlator, protocol effectiveness scoring and treatment
overview over a JSON snapshot exported from the log store:

    {"logs": [{"date": "...", "symptoms": [...], ...}, ...],
     "protocols": [{"title": "...", "start_date": "...", ...}, ...]}

Usage:
    python insights_report.py snapshot.json
    python insights_report.py snapshot.json --symptom Headache
    python insights_report.py snapshot.json --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger("insights_report")

from log_models import LogEntry, ProtocolRecord, log_entry_from_dict, protocol_from_dict
from pipeline.insights_pipeline import InsightsPipeline


def _rows(raw: Dict[str, Any], key: str) -> List[Any]:
    rows = raw.get(key) or []
    if not isinstance(rows, list):
        raise ValueError(f"{key}: expected a list, got {type(rows).__name__}")
    return rows


def load_snapshot(path: Path) -> Tuple[List[LogEntry], List[ProtocolRecord]]:
    """Parse a snapshot file; raises ValueError on malformed rows."""
    with open(path, "r", encoding="utf-8") as fh:
        raw: Dict[str, Any] = json.load(fh)
    if not isinstance(raw, dict):
        raise ValueError("snapshot must be an object with 'logs' and 'protocols'")

    logs = []
    for i, row in enumerate(_rows(raw, "logs")):
        if not isinstance(row, dict):
            raise ValueError(f"logs[{i}]: expected an object, got {type(row).__name__}")
        try:
            logs.append(log_entry_from_dict(row))
        except ValueError as e:
            raise ValueError(f"logs[{i}]: {e}") from e

    protocols = []
    for i, row in enumerate(_rows(raw, "protocols")):
        if not isinstance(row, dict):
            raise ValueError(f"protocols[{i}]: expected an object, got {type(row).__name__}")
        try:
            protocols.append(protocol_from_dict(row))
        except ValueError as e:
            raise ValueError(f"protocols[{i}]: {e}") from e

    log.info("Loaded %d log entries and %d protocols from %s", len(logs), len(protocols), path)
    return logs, protocols


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Symptom trigger and protocol effectiveness report"
    )
    parser.add_argument("snapshot", type=Path,
                        help="JSON snapshot with 'logs' and 'protocols'")
    parser.add_argument("--symptom", action="append", default=None,
                        help="Symptom to analyze (repeatable; default: all logged symptoms)")
    parser.add_argument("--min-samples", type=int, default=None,
                        help="Minimum entries per item before it is ranked")
    parser.add_argument("--top", type=int, default=None,
                        help="Items shown per list in the text digest")
    parser.add_argument("--json", action="store_true",
                        help="Print the full report as JSON instead of the digest")
    args = parser.parse_args(argv)

    try:
        logs, protocols = load_snapshot(args.snapshot)
    except (OSError, ValueError) as e:
        log.error("Could not load snapshot: %s", e)
        return 1

    pipeline = InsightsPipeline(logs, protocols, min_samples=args.min_samples, top_n=args.top)
    report = pipeline.run(symptoms=args.symptom)

    if args.json:
        print(json.dumps(report, indent=2, ensure_ascii=False, default=str))
    else:
        print(report["summary"] or "(no insights: snapshot is empty)")

    return 0 if report["analysis_status"] != "failed" else 1


if __name__ == "__main__":
    sys.exit(main())
