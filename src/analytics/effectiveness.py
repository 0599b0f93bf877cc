"""Protocol effectiveness from the weekly severity trend after a protocol starts."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Sequence, Tuple

import pandas as pd

from log_models import LogEntry, ProtocolRecord, WeeklyAggregate

log = logging.getLogger("effectiveness")

NO_DATA_SCORE = 0
NEUTRAL_SCORE = 3
MIN_WEEKS_FOR_TREND = 2


def _relevant_entries(protocol: ProtocolRecord, logs: Sequence[LogEntry]) -> List[LogEntry]:
    targets = set(protocol.target_symptoms)
    return [
        e for e in logs
        if e.date >= protocol.start_date and not targets.isdisjoint(e.symptoms)
    ]


def weekly_aggregates(protocol: ProtocolRecord, logs: Sequence[LogEntry]) -> List[WeeklyAggregate]:
    """Mean severity per ISO week of the protocol's relevant entries, oldest first."""
    if not protocol.target_symptoms:
        return []
    relevant = _relevant_entries(protocol, logs)
    if not relevant:
        return []

    rows = []
    for e in relevant:
        iso = e.date.isocalendar()
        rows.append({"iso_year": iso[0], "iso_week": iso[1], "severity": e.severity})
    df = pd.DataFrame(rows)

    weekly = (
        df.groupby(["iso_year", "iso_week"], sort=True)["severity"]
        .agg(["mean", "size"])
    )
    return [
        WeeklyAggregate(
            week_start=date.fromisocalendar(int(year), int(week), 1),
            mean_severity=float(mean),
            entry_count=int(size),
        )
        for (year, week), mean, size in weekly.itertuples(name=None)
    ]


def improvement_to_score(improvement: float) -> int:
    """Map first-minus-last weekly severity onto 1..5; branch order matters at the boundaries."""
    if improvement <= -1:
        return 1
    if improvement < 0:
        return 2
    if improvement < 1:
        return 3
    if improvement < 2:
        return 4
    return 5


def score(protocol: ProtocolRecord, logs: Sequence[LogEntry]) -> int:
    """
    Effectiveness of a protocol on a 0-5 scale.

    0  no target symptoms, or no matching entries since the start date
    3  matching entries exist but span fewer than two ISO weeks
    1-5 otherwise, from the change between the first and last week's mean
        severity (positive change = severity went down)
    """
    if not protocol.target_symptoms:
        return NO_DATA_SCORE

    weeks = weekly_aggregates(protocol, logs)
    if not weeks:
        return NO_DATA_SCORE
    if len(weeks) < MIN_WEEKS_FOR_TREND:
        return NEUTRAL_SCORE

    improvement = weeks[0].mean_severity - weeks[-1].mean_severity
    result = improvement_to_score(improvement)
    log.debug(
        "Protocol %r: %d weeks, improvement %.2f -> score %d",
        protocol.title, len(weeks), improvement, result,
    )
    return result


def score_active_protocols(
    protocols: Sequence[ProtocolRecord], logs: Sequence[LogEntry]
) -> List[Tuple[ProtocolRecord, int]]:
    """(protocol, score) for every active protocol, in input order."""
    return [(p, score(p, logs)) for p in protocols if p.is_active]
