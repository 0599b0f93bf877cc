"""
Treatment, environment and symptom-frequency analysis over a log snapshot.

These are the lighter heuristics behind the tracker's trend screens:
which treatment worked best, which moon phase / pressure label dominates,
how often each symptom is logged, and which foods or protocols to suggest
for a set of symptoms.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from config import TOP_N_DISPLAY
from log_models import LogEntry, ProtocolRecord, logs_to_frame

log = logging.getLogger("treatment_analysis")

NO_TREATMENT = "No Treatment"
UNKNOWN_LABEL = "Unknown"

# Recommender weights
MATCH_WEIGHT = 0.6
EFFECTIVENESS_WEIGHT = 0.4
NEUTRAL_EFFECTIVENESS = 0.5
MAX_RATING = 5.0


@dataclass(frozen=True)
class TreatmentEffectiveness:
    name: str
    average_effectiveness: float
    average_improvement: float
    average_resolution_days: float
    description: str


# ─── Treatments ────────────────────────────────────────────────


def _describe(treatment: str, improvement: float, resolution_days: float) -> str:
    if improvement <= 0:
        return f"No significant improvement observed with {treatment}"
    if resolution_days < 1:
        span = "less than a day"
    elif resolution_days == 1:
        span = "1 day"
    else:
        span = f"{int(resolution_days)} days"
    return f"{treatment} showed an improvement of {improvement:.1f} severity points over {span}"


def most_effective_treatment(logs: Sequence[LogEntry]) -> Optional[TreatmentEffectiveness]:
    """
    Group entries by their first treatment and pick the group with the
    highest mean explicit effectiveness rating.

    Improvement is the oldest entry's severity minus the newest one's, and the
    resolution span is the days between them; groups with a single entry get
    zero for both.
    """
    if not logs:
        return None

    df = logs_to_frame(logs)
    df["treatment"] = df["treatment"].fillna(NO_TREATMENT)
    df = df.sort_values("date", kind="stable")

    results: List[TreatmentEffectiveness] = []
    for name, group in df.groupby("treatment", sort=False):
        if len(group) >= 2:
            improvement = float(group["severity"].iloc[0] - group["severity"].iloc[-1])
        else:
            improvement = 0.0
        span = group["date"].iloc[-1] - group["date"].iloc[0]
        resolution_days = pd.Timedelta(span).total_seconds() / 86400.0
        ratings = pd.to_numeric(group["protocol_effectiveness"], errors="coerce").dropna()
        effectiveness = float(ratings.mean()) if len(ratings) else 0.0
        results.append(TreatmentEffectiveness(
            name=str(name),
            average_effectiveness=effectiveness,
            average_improvement=improvement,
            average_resolution_days=resolution_days,
            description=_describe(str(name), improvement, resolution_days),
        ))

    # max() returns the first of equal maxima
    return max(results, key=lambda r: r.average_effectiveness)


# ─── Environment ───────────────────────────────────────────────


def _most_common(values: pd.Series) -> str:
    values = values[values.notna() & (values.astype(str) != "")]
    if values.empty:
        return UNKNOWN_LABEL
    counts = values.value_counts(sort=False)
    return str(counts.idxmax())


def most_common_moon_phase(logs: Sequence[LogEntry]) -> str:
    return _most_common(logs_to_frame(logs)["moon_phase"])


def most_common_pressure(logs: Sequence[LogEntry]) -> str:
    return _most_common(logs_to_frame(logs)["atmospheric_pressure"])


# ─── Symptoms ──────────────────────────────────────────────────


def symptom_frequencies(logs: Sequence[LogEntry]) -> List[Tuple[str, int]]:
    """(symptom, count) pairs, most frequent first."""
    tags = pd.Series([s for e in logs for s in e.symptoms], dtype=object)
    if tags.empty:
        return []
    counts = tags.value_counts(sort=False)
    counts = counts.iloc[np.argsort(-counts.to_numpy(), kind="stable")]
    return [(str(name), int(n)) for name, n in counts.items()]


def severity_trend(logs: Sequence[LogEntry]) -> pd.Series:
    """Mean severity per calendar day, indexed by date."""
    df = logs_to_frame(logs)
    if df.empty:
        return pd.Series(dtype=float, name="severity")
    df["day"] = df["date"].map(lambda d: d.date() if hasattr(d, "date") else d)
    return df.groupby("day", sort=True)["severity"].mean().astype(float)


def predict_potential_triggers(
    symptoms: Sequence[str], logs: Sequence[LogEntry], limit: int = TOP_N_DISPLAY
) -> List[str]:
    """Foods most often logged alongside any of the given symptoms."""
    wanted = set(symptoms)
    foods = pd.Series(
        [e.food_drink_item for e in logs
         if e.food_drink_item and not wanted.isdisjoint(e.symptoms)],
        dtype=object,
    )
    if foods.empty:
        return []
    counts = foods.value_counts(sort=False)
    counts = counts.iloc[np.argsort(-counts.to_numpy(), kind="stable")]
    return [str(food) for food in counts.index[:max(limit, 0)]]


# ─── Protocols ─────────────────────────────────────────────────


def _match_count(protocol: ProtocolRecord, symptoms: set) -> int:
    return len(symptoms.intersection(protocol.target_symptoms))


def suggest_protocols(
    symptoms: Sequence[str], protocols: Sequence[ProtocolRecord]
) -> List[ProtocolRecord]:
    """Protocols targeting any of the symptoms, most overlapping first."""
    wanted = set(symptoms)
    matching = [p for p in protocols if _match_count(p, wanted) > 0]
    return sorted(matching, key=lambda p: _match_count(p, wanted), reverse=True)


def _usage_effectiveness(protocol: ProtocolRecord, logs: Sequence[LogEntry]) -> float:
    """0..1 effectiveness from entries that used the protocol; 0.5 when unknown."""
    used = [e for e in logs if protocol.protocol_id and e.protocol_id == protocol.protocol_id]
    if not used:
        return NEUTRAL_EFFECTIVENESS

    ratings = [e.protocol_effectiveness for e in used if e.protocol_effectiveness is not None]
    if ratings:
        return float(np.mean(ratings)) / MAX_RATING

    ordered = sorted(used, key=lambda e: e.date)
    if len(ordered) < 2 or ordered[0].severity <= 0:
        return NEUTRAL_EFFECTIVENESS
    first, last = float(ordered[0].severity), float(ordered[-1].severity)
    return NEUTRAL_EFFECTIVENESS + ((first - last) / first) / 2.0


def recommend_protocols(
    symptoms: Sequence[str],
    protocols: Sequence[ProtocolRecord],
    logs: Sequence[LogEntry],
) -> List[ProtocolRecord]:
    """
    Rank protocols targeting the symptoms by a weighted score:
    60% share of the requested symptoms covered, 40% past effectiveness.
    """
    wanted = set(symptoms)
    if not wanted:
        return []

    scored: List[Tuple[ProtocolRecord, float]] = []
    for proto in protocols:
        matches = _match_count(proto, wanted)
        if matches == 0:
            continue
        match_ratio = matches / len(wanted)
        effectiveness = _usage_effectiveness(proto, logs)
        final = match_ratio * MATCH_WEIGHT + effectiveness * EFFECTIVENESS_WEIGHT
        scored.append((proto, final))
        log.debug("Protocol %r: match %.2f, effectiveness %.2f -> %.3f",
                  proto.title, match_ratio, effectiveness, final)

    scored.sort(key=lambda pair: pair[1], reverse=True)
    return [p for p, _ in scored]


def treatment_overview(logs: Sequence[LogEntry]) -> Dict[str, object]:
    """Compact dict of the environment and treatment headlines for the digest."""
    best = most_effective_treatment(logs)
    return {
        "most_common_moon_phase": most_common_moon_phase(logs),
        "most_common_pressure": most_common_pressure(logs),
        "most_effective_treatment": best.name if best else None,
        "treatment_description": best.description if best else None,
    }
